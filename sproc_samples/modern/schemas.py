from pydantic import BaseModel, ConfigDict, Field


class ActiveUser(BaseModel):
    """Row returned by ``GetActiveUsers``, without the active flag.

    Built from the procedure's result mapping, whose keys are the SQL column
    names; any extra columns are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    email: str = Field(alias="Email")
