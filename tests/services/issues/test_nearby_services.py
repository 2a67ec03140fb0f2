# Third-party imports
import pytest

# Local application imports
from civictrack.core.exceptions import ValidationError
from civictrack.services.issues.nearby_services import find_nearby_issues
from tests.conftest import LA, NYC


async def test_finds_new_york_but_not_los_angeles(db, reporter, issue_factory):
    nyc = await issue_factory(reporter, title="Pothole in Manhattan")
    await issue_factory(reporter, title="Pothole in Los Angeles", latitude=LA[0], longitude=LA[1])

    issues = await find_nearby_issues(db, *NYC, 5)

    assert [issue.id for issue in issues] == [nyc.id]


async def test_box_corner_outside_radius_is_dropped(db, reporter, issue_factory):
    # Inside the bounding box on both axes, about 6.9 km away diagonally
    await issue_factory(reporter, latitude=NYC[0] + 0.044, longitude=NYC[1] + 0.058)
    near = await issue_factory(reporter, title="Flooded underpass", latitude=NYC[0] + 0.02, longitude=NYC[1])

    issues = await find_nearby_issues(db, *NYC, 5)

    assert [issue.id for issue in issues] == [near.id]


async def test_results_are_newest_first(db, reporter, issue_factory):
    older = await issue_factory(reporter, title="Older report")
    newer = await issue_factory(reporter, title="Newer report", latitude=NYC[0] + 0.001)

    issues = await find_nearby_issues(db, *NYC, 1)

    assert [issue.id for issue in issues] == [newer.id, older.id]


async def test_search_across_antimeridian(db, reporter, issue_factory):
    fiji = await issue_factory(reporter, title="Washed out road", latitude=-16.5, longitude=179.99)

    issues = await find_nearby_issues(db, -16.5, -179.99, 10)

    assert [issue.id for issue in issues] == [fiji.id]


async def test_search_near_pole(db, reporter, issue_factory):
    station = await issue_factory(reporter, title="Station generator down", latitude=89.99, longitude=10)

    issues = await find_nearby_issues(db, 89.99, -170, 10)

    assert [issue.id for issue in issues] == [station.id]


@pytest.mark.parametrize(
    "center, point",
    [
        ((0, 0), (0.8990, 0)),
        ((60, 0), (60.0071, 1.7980)),
    ],
)
async def test_finds_issue_just_inside_radius(db, reporter, issue_factory, center, point):
    edge = await issue_factory(reporter, title="Fallen tree on the verge", latitude=point[0], longitude=point[1])

    issues = await find_nearby_issues(db, *center, 100)

    assert [issue.id for issue in issues] == [edge.id]


async def test_empty_area(db, reporter, issue_factory):
    await issue_factory(reporter)

    assert list(await find_nearby_issues(db, 0, 0, 50)) == []


@pytest.mark.parametrize(
    "latitude, longitude, radius",
    [(91, 0, 5), (0, 181, 5), (0, 0, 0), (0, 0, -1), (0, 0, float("nan")), (0, 0, "far")],
)
async def test_invalid_input(db, latitude, longitude, radius):
    with pytest.raises(ValidationError):
        await find_nearby_issues(db, latitude, longitude, radius)
