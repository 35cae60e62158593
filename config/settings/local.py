# config/settings/local.py
from .base import *  # noqa

DEBUG = True

LOGGING["loggers"]["lab_core"]["level"] = "DEBUG"  # noqa: F405
