from pydantic import BaseModel, ConfigDict, Field


class ResolvedUid(BaseModel):
    model_config = ConfigDict(extra="forbid")

    uid: int
    username: str
    display_name: str = ""


class UidCollision(BaseModel):
    model_config = ConfigDict(extra="forbid")

    uid: int
    usernames: list[str]


class UidAnalysis(BaseModel):
    model_config = ConfigDict(extra="forbid")

    resolved: list[ResolvedUid] = Field(default_factory=list)
    collisions: list[UidCollision] = Field(default_factory=list)
