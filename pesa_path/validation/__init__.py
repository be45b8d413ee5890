"""Form validation package."""

from pesa_path.validation.forms import FormValidationError, FormValidator

__all__ = ["FormValidationError", "FormValidator"]
