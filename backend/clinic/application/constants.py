"""Per-resource allowlists for the list-query builder."""

from clinic.application.query import QueryBuilderConfig

USER_SEARCHABLE_FIELDS = ("email",)
USER_FILTERABLE_FIELDS = ("email", "role", "status", "needPasswordChange")

PATIENT_SEARCHABLE_FIELDS = ("name", "email", "address")
PATIENT_FILTERABLE_FIELDS = ("email", "contactNumber", "isDeleted")

USER_QUERY_CONFIG = QueryBuilderConfig(
    searchable_fields=USER_SEARCHABLE_FIELDS,
    filterable_fields=USER_FILTERABLE_FIELDS,
)

PATIENT_QUERY_CONFIG = QueryBuilderConfig(
    searchable_fields=PATIENT_SEARCHABLE_FIELDS,
    filterable_fields=PATIENT_FILTERABLE_FIELDS,
)
