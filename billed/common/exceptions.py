class AppError(Exception):
    """Base class for all application exceptions."""
    pass

class ResourceNotFoundError(AppError):
    """Generic error when a requested resource is not found."""
    def __init__(self, resource_name: str, identifier: any):
        self.message = f"{resource_name} avec l'identifiant {identifier} introuvable."
        super().__init__(self.message)
