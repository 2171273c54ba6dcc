"""Core business logic layer.

Subpackages:
- access: plan gating of views and features
- weather: forecast mapping, task suggestions and weather alerts
- reporting: cash-flow and harvest aggregations
- catalog: vegetable creation with background image generation
- garden: garden design prompts and plant quantities
"""
__all__ = ["access", "weather", "reporting", "catalog", "garden"]
