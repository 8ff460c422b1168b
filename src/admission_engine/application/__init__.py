"""Application layer for the admissions engine.

Exports:
    Query Service:
        - AdmissionQueryService: Session entry point owning the DataStore snapshot
        - NoSnapshotError: Raised when querying before a snapshot is loaded
        - bootstrap: Builds a service with observability configured
    Operators:
        - Operator: Base class for Volcano-model operators
        - Row: A row of named values
        - filter_records, project, inner_join, group_aggregate,
          sort_records, top_k, distinct: Eager operator functions
        - AggregateFunc, AggregateSpec, SortKey: Operator parameters
"""

from admission_engine.application.operators import (
    EXHAUSTED,
    AggregateFunc,
    AggregateSpec,
    DistinctOperator,
    FilterOperator,
    GroupAggregateOperator,
    HashJoinOperator,
    LimitOperator,
    Operator,
    ProjectOperator,
    Row,
    ScanOperator,
    SortKey,
    SortOperator,
    distinct,
    filter_records,
    group_aggregate,
    inner_join,
    project,
    sort_records,
    top_k,
)
from admission_engine.application.query_service import (
    AdmissionQueryService,
    NoSnapshotError,
    bootstrap,
)

__all__ = [
    "AdmissionQueryService",
    "NoSnapshotError",
    "bootstrap",
    "EXHAUSTED",
    "Operator",
    "Row",
    "ScanOperator",
    "FilterOperator",
    "ProjectOperator",
    "HashJoinOperator",
    "GroupAggregateOperator",
    "SortOperator",
    "LimitOperator",
    "DistinctOperator",
    "AggregateFunc",
    "AggregateSpec",
    "SortKey",
    "filter_records",
    "project",
    "inner_join",
    "group_aggregate",
    "sort_records",
    "top_k",
    "distinct",
]
