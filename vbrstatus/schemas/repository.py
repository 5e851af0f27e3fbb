from pydantic import BaseModel, ConfigDict, Field


class RawRepository(BaseModel):
    """Repository instance as returned by the ROOT\\VeeamBS CIM class."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(alias="Name")
    capacity: int = Field(default=0, alias="Capacity")
    free_space: int = Field(default=0, alias="FreeSpace")
    out_of_date: bool = Field(default=False, alias="OutOfDate")


class RepositoryRecord(BaseModel):
    """Repository capacity and health, serialized with the Zabbix macro names."""

    name: str = Field(serialization_alias="REPONAME")
    capacity: int = Field(serialization_alias="REPOCAPACITY")
    free: int = Field(serialization_alias="REPOFREE")
    out_of_date: bool = Field(serialization_alias="REPOOUTOFDATE")
