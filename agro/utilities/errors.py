"""Application exceptions. Each carries the message shown to the farmer."""


class AgroError(Exception):
    """Base class; str(err) is the display message."""


class ValidationFailed(AgroError):
    pass


class ForecastUnavailable(AgroError):
    pass


class GenerationFailed(AgroError):
    pass


class AIUnavailable(AgroError):
    """Raised when no OpenAI API key is configured."""


class WizardError(AgroError):
    pass
