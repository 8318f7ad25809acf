"""Feature plan (plan.md) parsing.

Plans carry their technical context as bold-labelled lines:
    **Language/Version**: Python 3.11
    **Primary Dependencies**: FastAPI
    **Storage**: PostgreSQL
    **Project Type**: web
"""

# Label → PlanFields attribute
FIELD_LABELS = {
    "Language/Version": "language",
    "Primary Dependencies": "primary_dependencies",
    "Storage": "storage",
    "Project Type": "project_type",
}

# Placeholder values that mean "not decided yet"
NEEDS_CLARIFICATION = "NEEDS CLARIFICATION"
NOT_APPLICABLE = "N/A"
