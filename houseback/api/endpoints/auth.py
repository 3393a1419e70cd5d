"""
Auth endpoints - signup and signin.
Handlers return exactly one response: whatever render() builds from the service result.
"""

from fastapi import APIRouter

from houseback.api.responses import render
from houseback.core.dependencies import RegistrationServiceDep, SigninServiceDep
from houseback.core.metrics import SIGNIN_TOTAL, SIGNUP_TOTAL
from houseback.schemas.user import SigninRequest, SignupRequest

router = APIRouter()


@router.post("/signup", status_code=201)
async def signup(service: RegistrationServiceDep, data: SignupRequest):
    """Create a new user. Returns the user without any password material."""
    result = await service.register(data.email, data.name, data.password)
    SIGNUP_TOTAL.labels(outcome=result.outcome).inc()
    return render(result)


@router.post("/signin")
async def signin(service: SigninServiceDep, data: SigninRequest):
    """Check credentials and return a bearer token."""
    result = await service.authenticate(data.email, data.password)
    SIGNIN_TOTAL.labels(outcome=result.outcome).inc()
    return render(result)
