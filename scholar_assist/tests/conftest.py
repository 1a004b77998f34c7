import os

os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")

import pytest  # noqa: E402
from tortoise import Tortoise  # noqa: E402


@pytest.fixture(autouse=True)
async def db_session():
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": ["scholar_assist.models"]})
    await Tortoise.generate_schemas()

    yield
    await Tortoise.close_connections()
