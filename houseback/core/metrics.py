"""Prometheus counters for the auth endpoints, exposed at /metrics."""

from prometheus_client import Counter

SIGNUP_TOTAL = Counter("houseback_signup_total", "Signup requests by outcome", ["outcome"])
SIGNIN_TOTAL = Counter("houseback_signin_total", "Signin requests by outcome", ["outcome"])
