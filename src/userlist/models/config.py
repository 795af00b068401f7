from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _default_keys() -> list[str]:
    return [str(Path("~") / ".ssh" / "id_rsa")]


class UserlistConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    server_list: str | list[str] = ""
    ssh_user: str = ""
    private_keys: list[str] = Field(default_factory=_default_keys)
    ssh_timeout: str = "10s"
    loglevel: str = "info"
    logfile: str | None = None
    out_file: str = "userlist.csv"
    collisions_file: str = "uid_conflict.csv"
    uidmap_file: str = "uid_map.csv"
    default_domain: str = ""
    workers: int = Field(default=1, ge=1)

    @field_validator("ssh_timeout", mode="before")
    @classmethod
    def _timeout_as_text(cls, value: object) -> object:
        # YAML reads a bare ``10`` as an int
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value
