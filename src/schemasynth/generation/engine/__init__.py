"""Generation entry points."""

from .orchestrator import DatasetOrchestrator, GenerationStage, generate_dataset
from .custom import (
    generate_custom,
    generate_archetype_records,
    generate_people,
    generate_companies,
)

__all__ = [
    "DatasetOrchestrator",
    "GenerationStage",
    "generate_dataset",
    "generate_custom",
    "generate_archetype_records",
    "generate_people",
    "generate_companies",
]
