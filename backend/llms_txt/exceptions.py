"""Errors raised while serving llms.txt documents."""


class LlmsTxtError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DocumentNotFoundError(LlmsTxtError):
    """The requested category, topic or tag does not exist or is not public."""

    status_code = 404


class FeatureDisabledError(LlmsTxtError):
    status_code = 404
