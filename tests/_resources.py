"""Shared test constants."""

DEV_BUILD_PATH = "/dist/"
PROD_BUILD_PATH = "/production-location/"
