"""Domain exceptions."""


class RoleGuardError(Exception):
    """Base exception for RoleGuard."""

    pass


class ValidationError(RoleGuardError):
    """Validation failed for input data."""

    pass


class DuplicateNameError(ValidationError):
    """Another role already uses this name."""

    pass


class NotFound(RoleGuardError):
    """Requested resource was not found."""

    def __init__(self, kind: str, reference: object) -> None:
        super().__init__(f"{kind} not found: {reference}")
        self.kind = kind
        self.reference = reference


class UnknownRoleError(NotFound):
    """Role reference cannot be resolved."""

    def __init__(self, reference: object) -> None:
        super().__init__("Role", reference)


class UnknownPermissionError(NotFound):
    """Permission reference cannot be resolved."""

    def __init__(self, reference: object) -> None:
        super().__init__("Permission", reference)


class UnknownSettingsFactoryError(NotFound):
    """Grant references a settings factory that is not registered."""

    def __init__(self, reference: object) -> None:
        super().__init__("Settings factory", reference)


class RecursiveNestingError(RoleGuardError):
    """Adding the role would make the role graph cyclic."""

    pass


class TemplatingNotAllowedError(RoleGuardError):
    """Settings factories may only be attached to grants held by roles."""

    pass


class NotAuthorizedError(RoleGuardError):
    """ACL presets or conditions rejected the operation."""

    pass
