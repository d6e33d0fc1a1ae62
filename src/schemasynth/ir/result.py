"""Generation result model."""

from typing import Any, Dict, List
import pandas as pd
from pydantic import BaseModel, model_validator


class GenerationResult(BaseModel):
    """Records per entity plus summary metadata for one generation call."""

    dataset: Dict[str, List[Dict[str, Any]]]
    entity_counts: Dict[str, int]
    total_records: int
    seed: int

    @model_validator(mode="after")
    def check_counts(self) -> "GenerationResult":
        """Counts must agree with the generated records."""
        if set(self.entity_counts) != set(self.dataset):
            raise ValueError("entity_counts and dataset must name the same entities")
        for name, records in self.dataset.items():
            if self.entity_counts[name] != len(records):
                raise ValueError(
                    f"entity_counts['{name}'] is {self.entity_counts[name]} "
                    f"but {len(records)} records were generated"
                )
        if self.total_records != sum(self.entity_counts.values()):
            raise ValueError("total_records must equal the sum of entity_counts")
        return self

    def to_frames(self) -> Dict[str, pd.DataFrame]:
        """One DataFrame per entity, columns in record order."""
        return {
            name: pd.DataFrame.from_records(records)
            for name, records in self.dataset.items()
        }

    def to_payload(self) -> Dict[str, Any]:
        """Response payload shape used by tool-invocation callers."""
        return {
            "dataset": self.dataset,
            "metadata": {
                "entityCounts": self.entity_counts,
                "totalRecords": self.total_records,
                "seed": self.seed,
            },
        }
