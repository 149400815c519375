"""Error taxonomy for ingredient extraction and the grocery API."""


class ExtractionError(Exception):
    """Base class for ingredient extraction failures."""

    status_code = 500


class BadRequestError(ExtractionError):
    """Request is missing both recipe text and an image, or is malformed."""

    status_code = 400


class ConfigurationError(ExtractionError):
    """No extraction provider has credentials configured."""

    status_code = 500


class ProviderError(ExtractionError):
    """A provider call failed at the transport or HTTP level."""

    status_code = 502
    is_quota = False


class QuotaExceededError(ProviderError):
    """A provider reported an exhausted quota or a rate limit."""

    status_code = 429
    is_quota = True


class MalformedResponseError(ProviderError):
    """A provider replied but the reply held no usable ingredient list."""


class NoIngredientsFoundError(ExtractionError):
    """Every extraction path was exhausted without a result."""

    status_code = 422
    is_quota_error = False


class AllProvidersQuotaExceededError(NoIngredientsFoundError):
    """Every path failed and at least one failure was a quota error."""

    status_code = 429
    is_quota_error = True


class PaymentVerificationError(Exception):
    """Payment could not be verified because of a configuration or gateway error."""


class NotFoundError(Exception):
    """Requested grocery item or recipe does not exist for the user."""


class RecipeLimitReachedError(Exception):
    """A free-tier user tried to save more recipes than allowed."""
