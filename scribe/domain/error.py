"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class UserValidationError(ValidationError):
    """Raised when a user record fails validation.

    Carries field-level messages so callers can show them next to the
    offending inputs.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field} {message}"
            for field, messages in errors.items()
            for message in messages
        )
        super().__init__(f"User is invalid: {details}")


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class IdentityConflictError(BusinessRuleViolationError):
    """Raised when a provider account cannot be linked to the requested user."""

    def __init__(self, provider: str, uid: str, reason: str):
        self.provider = provider
        self.uid = uid
        self.reason = reason
        super().__init__(f"Cannot link {provider} account {uid}: {reason}")


class RegistrationError(DomainError):
    """Raised when a new user could not be persisted after retrying."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
