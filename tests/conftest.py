"""Shared Hypothesis configuration.

Pick a profile with ``pytest --hypothesis-profile=<name>``.
"""

from hypothesis import HealthCheck, settings

# Statistical tests draw tens of thousands of samples per example.
settings.register_profile(
    "base", deadline=None, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile(
    "ci",
    max_examples=500,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("base")
