from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional
import yaml
from pydantic import BaseModel, Field

OutputFormat = Literal["text", "json"]

# ---- Group ABNs (14 digits: 11-digit core + 3-digit member number) ----
class GroupConfig(BaseModel):
    enabled: bool = True

# ---- Output (CLI rendering) ----
class OutputConfig(BaseModel):
    format: OutputFormat = "text"
    show_reason: bool = True  # print why a value was rejected

# ---- Free-text finder ----
class FinderConfig(BaseModel):
    rulesets: List[str] = Field(default_factory=lambda: ["abn.yaml"])

# ---- Root config ----
class AbnConfig(BaseModel):
    group: GroupConfig = Field(default_factory=GroupConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    finder: FinderConfig = Field(default_factory=FinderConfig)

# ---- Loader ----
def load_config(path: Optional[Path]) -> AbnConfig:
    if not path:
        return AbnConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    return AbnConfig(**data)
