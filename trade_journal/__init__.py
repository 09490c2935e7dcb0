# Expose key components of the trade_journal package
from . import models
from .models import *  # Expose all models for convenience

__version__ = "0.1.0"

__all__ = ["models", "__version__"]

# Add all model names to __all__ to make them available via "from trade_journal import User"
if hasattr(models, "__all__"):
    __all__.extend(models.__all__)
    __all__ = sorted(list(set(__all__)))
