"""Test configuration and fixtures."""

import os

# Required platform settings must exist before any Settings() is built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("PLATFORM__URL", "http://platform.test")
os.environ.setdefault("PLATFORM__ANON_KEY", "test-anon-key")
os.environ.setdefault(
    "PLATFORM__JWT_SECRET", "test-jwt-secret-with-enough-length-for-hs256"
)
os.environ.setdefault("PAYMENT__WEBHOOK_SECRET", "whsec_test_secret")
os.environ.setdefault("PAYMENT__MONTHLY_PRICE_ID", "price_monthly_test")
os.environ.setdefault("PAYMENT__YEARLY_PRICE_ID", "price_yearly_test")
