"""Pydantic schemas for database connection and DDL export requests."""
from typing import Optional, Literal
from pydantic import BaseModel, Field


class ConnectionRequest(BaseModel):
    db_type: Literal["sqlite", "postgresql", "mysql"] = Field(..., description="Database engine type")

    # SQLite only
    file_path: Optional[str] = Field(None, description="Absolute path to .db file (SQLite only)")

    # PostgreSQL / MySQL
    host: Optional[str] = Field(None, description="Database host")
    port: Optional[int] = Field(None, description="Database port (engine default when omitted)")
    database: Optional[str] = Field(None, description="Database name")
    username: Optional[str] = Field(None, description="Username")
    password: Optional[str] = Field(None, description="Password")

    def get_sqlalchemy_url(self) -> str:
        if self.db_type == "sqlite":
            return f"sqlite:///{self.file_path}"
        if self.db_type == "mysql":
            return (
                f"mysql+pymysql://{self.username}:{self.password}"
                f"@{self.host}:{self.port or 3306}/{self.database}"
            )
        return (
            f"postgresql+psycopg2://{self.username}:{self.password}"
            f"@{self.host}:{self.port or 5432}/{self.database}"
        )


class DdlExportRequest(BaseModel):
    connection: ConnectionRequest
    tables: Optional[list[str]] = Field(None, description="Tables to export (all tables when omitted)")
    target_dialect: Optional[Literal["sqlite", "postgresql", "mysql"]] = Field(
        None, description="Dialect of the generated script (source engine when omitted)"
    )
