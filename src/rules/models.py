from pydantic import BaseModel, Field, field_validator

from src.domain.entities import SeedTask

DEFAULT_SEED: list[SeedTask] = [
    SeedTask(title="Learn FastAPI", done=False),
    SeedTask(title="Build a demo application", done=False),
    SeedTask(title="Discover server-side templates", done=True),
]


class ProjectRules(BaseModel):
    slug: str = "task-list"
    title: str = "Task List"

class ServerRules(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)

class PagesRules(BaseModel):
    user_name: str = "Guest"
    contact_email: str = "hello@example.com"

class Rules(BaseModel):
    project: ProjectRules = Field(default_factory=ProjectRules)
    server: ServerRules = Field(default_factory=ServerRules)
    pages: PagesRules = Field(default_factory=PagesRules)
    seed: list[SeedTask] = Field(default_factory=lambda: list(DEFAULT_SEED))

    @field_validator("seed")
    @classmethod
    def seed_titles_not_blank(cls, value: list[SeedTask]) -> list[SeedTask]:
        for entry in value:
            if not entry.title.strip():
                raise ValueError("seed task titles must not be empty")
        return value
