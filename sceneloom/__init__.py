"""SceneLoom: Unity scene hierarchy dumps and unused script detection."""

__version__ = "0.1.0"
