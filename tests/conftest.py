import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from paintdesk.estimating.models import LaborMaterial, LaborTask, Room, RoomFeature, Section
from paintdesk.main import app


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def roll_walls():
    return LaborTask(
        name="Roll walls",
        hours=3,
        rate=35,
        materials=[LaborMaterial(quantity=2, price=45)],
    )


@pytest.fixture
def sample_room(roll_walls):
    # 40 ft of wall at 2 coats with one task, 150 sq ft of ceiling without tasks
    return Room(
        name="Living room",
        features=[
            RoomFeature(
                name="North wall",
                section=Section.WALLS,
                magnitude=40,
                coats=2,
                work_labor=[roll_walls],
            ),
            RoomFeature(name="Ceiling", section=Section.CEILING, magnitude=150, coats=1),
        ],
    )
