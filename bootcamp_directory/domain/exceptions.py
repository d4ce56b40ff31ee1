class DomainError(Exception):
    pass


class ValidationError(DomainError):
    pass


class InvalidQueryError(ValidationError):
    pass


class FileUploadError(ValidationError):
    pass


class NotFoundError(DomainError):
    pass


class ConflictError(DomainError):
    pass


class AuthenticationError(DomainError):
    pass


class AuthorizationError(DomainError):
    pass


class RepositoryError(DomainError):
    pass
