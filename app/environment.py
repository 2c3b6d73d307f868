from enum import Enum


class EnvironmentName(Enum):
    TESTING = "test"
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
