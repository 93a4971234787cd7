"""Unit tests for ProjectService."""

import pytest

from simpledata.domain.exceptions import PayloadValidationError, ProjectNotFoundError
from simpledata.domain.services.project_service import KEY_PREFIX_LENGTH, ProjectService


def test_generate_key():
    key = ProjectService.generate_key()
    assert len(key) == 64
    int(key, 16)
    assert ProjectService.generate_key() != key


def test_hash_key_is_sha256():
    assert ProjectService.hash_key("abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


@pytest.mark.asyncio
async def test_create_project(db_session):
    service = ProjectService(db_session)

    api_key, project = await service.create_project("  My App  ", "acct_1")

    assert project.name == "My App"
    assert project.owner_account_id == "acct_1"
    assert project.key_prefix == api_key[:KEY_PREFIX_LENGTH]


@pytest.mark.asyncio
async def test_create_project_requires_name(db_session):
    with pytest.raises(PayloadValidationError, match="Project name is required"):
        await ProjectService(db_session).create_project("", "acct_1")


@pytest.mark.asyncio
async def test_resolve_api_key(db_session):
    service = ProjectService(db_session)
    api_key, project = await service.create_project("My App", "acct_1")

    resolved = await service.resolve_api_key(api_key)

    assert resolved.id == project.id
    assert await service.resolve_api_key("not-a-key") is None


@pytest.mark.asyncio
async def test_projects_are_scoped_to_owner(db_session):
    service = ProjectService(db_session)
    _, mine = await service.create_project("Mine", "acct_1")
    await service.create_project("Theirs", "acct_2")

    assert [p.id for p in await service.list_projects("acct_1")] == [mine.id]
    assert (await service.get_project(mine.id, "acct_1")).name == "Mine"
    with pytest.raises(ProjectNotFoundError):
        await service.get_project(mine.id, "acct_2")
    with pytest.raises(ProjectNotFoundError):
        await service.delete_project(mine.id, "acct_2")


@pytest.mark.asyncio
async def test_delete_project(db_session):
    service = ProjectService(db_session)
    api_key, project = await service.create_project("My App", "acct_1")

    await service.delete_project(project.id, "acct_1")

    assert await service.resolve_api_key(api_key) is None
    with pytest.raises(ProjectNotFoundError):
        await service.get_project(project.id, "acct_1")
