"""
Sprout knowledge base.

Contains reference data for infant care:
- WHO growth standards (0-12 months)
- Sleep duration recommendations
"""
