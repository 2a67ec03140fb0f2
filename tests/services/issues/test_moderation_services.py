# Standard library imports
from uuid import uuid4

# Third-party imports
import pytest
from sqlalchemy import func, select

# Local application imports
from civictrack.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from civictrack.models.issues import Flag, Issue, IssueStatus
from civictrack.services.issues import moderation_services


async def test_flag_issue(db, reporter, neighbor, issue_factory):
    issue = await issue_factory(reporter)

    flag = await moderation_services.flag_issue(db, issue.id, neighbor, "  Photo shows a different street ")

    assert flag.issue_id == issue.id
    assert flag.user_id == neighbor.id
    assert flag.reason == "Photo shows a different street"
    assert flag.resolved is False
    assert flag.resolved_at is None


async def test_duplicate_flag_is_a_conflict_and_keeps_one_row(db, reporter, neighbor, issue_factory):
    issue = await issue_factory(reporter)
    issue_id = issue.id
    await moderation_services.flag_issue(db, issue_id, neighbor, "Looks like spam")

    with pytest.raises(ConflictError):
        await moderation_services.flag_issue(db, issue_id, neighbor, "Still looks like spam")

    total = await db.execute(
        select(func.count()).select_from(Flag).where(Flag.issue_id == issue_id, Flag.user_id == neighbor.id)
    )
    assert total.scalar_one() == 1


async def test_different_users_may_flag_the_same_issue(db, reporter, neighbor, admin, issue_factory):
    issue = await issue_factory(reporter)

    await moderation_services.flag_issue(db, issue.id, neighbor, "Looks like spam")
    await moderation_services.flag_issue(db, issue.id, admin, "Wrong category")

    assert len(await moderation_services.list_unresolved_flags(db, issue.id)) == 2


async def test_flag_unknown_issue(db, neighbor):
    with pytest.raises(NotFoundError):
        await moderation_services.flag_issue(db, uuid4(), neighbor, "Looks like spam")


async def test_flag_requires_reason(db, reporter, neighbor, issue_factory):
    issue = await issue_factory(reporter)

    with pytest.raises(ValidationError):
        await moderation_services.flag_issue(db, issue.id, neighbor, "   ")


async def test_admin_resolves_flag_without_touching_issue(db, reporter, neighbor, admin, issue_factory):
    issue = await issue_factory(reporter)
    flag = await moderation_services.flag_issue(db, issue.id, neighbor, "Looks like spam")

    resolved = await moderation_services.resolve_flag(db, flag.id, admin)

    assert resolved.resolved is True
    assert resolved.resolved_by_id == admin.id
    assert resolved.resolved_at is not None
    assert await moderation_services.list_unresolved_flags(db, issue.id) == []
    assert (await db.get(Issue, issue.id, populate_existing=True)).status == IssueStatus.REPORTED


async def test_non_admin_cannot_resolve_flag(db, reporter, neighbor, issue_factory):
    issue = await issue_factory(reporter)
    flag = await moderation_services.flag_issue(db, issue.id, neighbor, "Looks like spam")
    flag_id = flag.id

    with pytest.raises(ForbiddenError):
        await moderation_services.resolve_flag(db, flag_id, reporter)

    assert (await db.get(Flag, flag_id, populate_existing=True)).resolved is False


async def test_resolving_twice_is_a_conflict(db, reporter, neighbor, admin, issue_factory):
    issue = await issue_factory(reporter)
    flag = await moderation_services.flag_issue(db, issue.id, neighbor, "Looks like spam")
    flag_id = flag.id
    await moderation_services.resolve_flag(db, flag_id, admin)

    with pytest.raises(ConflictError):
        await moderation_services.resolve_flag(db, flag_id, admin)


async def test_resolve_unknown_flag(db, admin):
    with pytest.raises(NotFoundError):
        await moderation_services.resolve_flag(db, uuid4(), admin)


async def test_moderation_queue(db, reporter, neighbor, admin, issue_factory):
    first = await issue_factory(reporter)
    second = await issue_factory(reporter, title="Graffiti on bridge")
    old_flag = await moderation_services.flag_issue(db, first.id, neighbor, "Looks like spam")
    new_flag = await moderation_services.flag_issue(db, second.id, neighbor, "Offensive wording")
    await moderation_services.resolve_flag(db, old_flag.id, admin)

    unresolved = await moderation_services.list_flags(db, resolved=False)
    everything = await moderation_services.list_flags(db)

    assert [flag.id for flag in unresolved] == [new_flag.id]
    assert [flag.id for flag in everything] == [old_flag.id, new_flag.id]
