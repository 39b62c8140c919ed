from pydantic import BaseModel, ConfigDict

class AppBaseModel(BaseModel):
    """
    Global base model for the application.
    Centralizes Pydantic configuration (strict mode, stripping, etc.).
    """
    model_config = ConfigDict(
        strict=True,                # No implicit type coercion (ex: "1" != 1)
        str_strip_whitespace=True,  # Auto-strip whitespace from strings
        validate_assignment=True,   # Validate values even when setting attributes after creation
        populate_by_name=True,      # Accept both field names and camelCase aliases
        frozen=False                # Allow mutation (default)
    )

class StoreModel(AppBaseModel):
    """
    Base for payloads delivered by the remote store.
    Store data is not trusted to be well typed, so coercion is allowed
    and unknown keys are preserved.
    """
    model_config = ConfigDict(
        strict=False,
        extra="allow",
        str_strip_whitespace=False,  # Raw values are displayed verbatim
        coerce_numbers_to_str=True,  # Numeric names or comments stay displayable
    )
