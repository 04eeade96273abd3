"""Configuration for the TeamCity test logger."""

from pydantic import BaseModel, ConfigDict


class LoggerConfig(BaseModel):
    """Configuration for the TeamCity test logger."""

    model_config = ConfigDict(extra="forbid")

    root_suite_name: str = "VSTest"
    # Set when several build steps share one log and need separate trees
    flow_id: str | None = None
    add_timestamps: bool = False
