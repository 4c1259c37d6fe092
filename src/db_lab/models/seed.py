"""Seed pack configuration model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SeedPack(BaseModel):
    """Named bundle of scripts and CSV files for populating a database.

    Paths are passed through untouched; nothing in db-lab reads them yet.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="Retail", description="Seed pack name")
    create_script_path: Optional[str] = Field(
        None, description="Script that creates the schema"
    )
    constraints_script_path: Optional[str] = Field(
        None, description="Script that adds constraints after loading"
    )
    reset_script_path: Optional[str] = Field(
        None, description="Script that returns the database to a clean state"
    )
    csv_paths: Optional[dict[str, str]] = Field(
        None, description="Table name to CSV source path"
    )
