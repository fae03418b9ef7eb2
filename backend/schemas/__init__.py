"""
Pydantic schemas for records, pages and API responses.

Form input is validated explicitly in backend.services.validation; the models
here describe the typed results that flow to services and templates.
"""
