"""Unit tests for the in-memory pet repository."""

from datetime import datetime, timezone

import pytest

from app.domain.entities import Pet
from app.infrastructure.memory import InMemoryPetRepository
from app.infrastructure.security import AESFieldCipher


def _pet(name: str = "Max", owner_name: str = "Juan García", **overrides) -> Pet:
    values = dict(
        name=name,
        species="Perro",
        breed="Golden Retriever",
        age=3,
        owner_name=owner_name,
    )
    values.update(overrides)
    return Pet(**values)


@pytest.fixture
def repository(fake_cipher, clock) -> InMemoryPetRepository:
    return InMemoryPetRepository(fake_cipher, clock=clock)


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(repository: InMemoryPetRepository):
    created = await repository.create(_pet())

    assert created.id is not None
    assert created.created_at == created.updated_at
    assert created.owner_name == "Juan García"
    assert await repository.exists(created.id)


@pytest.mark.asyncio
async def test_owner_name_is_encrypted_at_rest_with_aes(clock):
    repository = InMemoryPetRepository(AESFieldCipher("store-secret"), clock=clock)
    created = await repository.create(_pet())

    stored = repository._pets[created.id].owner_name
    assert stored != "Juan García"
    assert ":" in stored

    found = await repository.get_by_id(created.id)
    assert found is not None
    assert found.owner_name == "Juan García"


@pytest.mark.asyncio
async def test_get_by_id_returns_independent_copy(repository: InMemoryPetRepository):
    created = await repository.create(_pet())

    found = await repository.get_by_id(created.id)
    found.name = "Mutated"
    found.owner_name = "Someone Else"

    again = await repository.get_by_id(created.id)
    assert again.name == "Max"
    assert again.owner_name == "Juan García"


@pytest.mark.asyncio
async def test_create_does_not_keep_caller_reference(repository: InMemoryPetRepository):
    pet = _pet()
    created = await repository.create(pet)
    pet.name = "Changed After Create"

    found = await repository.get_by_id(created.id)
    assert found.name == "Max"


@pytest.mark.asyncio
async def test_get_by_id_unknown_returns_none(repository: InMemoryPetRepository):
    assert await repository.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_find_all_paginates(repository: InMemoryPetRepository):
    for i in range(7):
        await repository.create(_pet(name=f"Pet {i}"))

    first = await repository.find_all(1, 6)
    assert len(first.items) == 6
    assert first.info.total == 7
    assert first.info.total_pages == 2

    second = await repository.find_all(2, 6)
    assert len(second.items) == 1

    beyond = await repository.find_all(3, 6)
    assert beyond.items == []
    assert beyond.info.total == 7
    assert beyond.info.total_pages == 2


@pytest.mark.asyncio
async def test_find_all_on_empty_store(repository: InMemoryPetRepository):
    page = await repository.find_all(1, 6)
    assert page.items == []
    assert page.info.total == 0
    assert page.info.total_pages == 0


@pytest.mark.asyncio
async def test_find_all_orders_newest_first(repository: InMemoryPetRepository):
    await repository.create(_pet(name="Oldest"))
    await repository.create(_pet(name="Middle"))
    await repository.create(_pet(name="Newest"))

    page = await repository.find_all(1, 10)
    assert [p.name for p in page.items] == ["Newest", "Middle", "Oldest"]


@pytest.mark.asyncio
async def test_equal_timestamps_fall_back_to_insertion_order(fake_cipher):
    frozen = _pet().created_at
    repository = InMemoryPetRepository(fake_cipher, clock=lambda: frozen)
    await repository.create(_pet(name="First"))
    await repository.create(_pet(name="Second"))

    page = await repository.find_all(1, 10)
    assert [p.name for p in page.items] == ["Second", "First"]


@pytest.mark.asyncio
async def test_find_all_returns_plaintext_owner_names(repository: InMemoryPetRepository):
    await repository.create(_pet(owner_name="María López"))
    page = await repository.find_all(1, 6)
    assert page.items[0].owner_name == "María López"


@pytest.mark.asyncio
async def test_find_all_rejects_invalid_page(repository: InMemoryPetRepository):
    with pytest.raises(ValueError):
        await repository.find_all(0, 6)
    with pytest.raises(ValueError):
        await repository.find_all(1, 0)


@pytest.mark.asyncio
async def test_search_matches_any_field_case_insensitively(repository: InMemoryPetRepository):
    await repository.create(_pet(name="Max", owner_name="Juan García"))
    await repository.create(_pet(name="Luna", species="Gato", breed="Siamés", owner_name="María López"))
    await repository.create(_pet(name="Coco", species="Ave", breed="Loro", owner_name="Pedro Sánchez"))

    by_species = await repository.find_by_search("gato", 1, 6)
    assert [p.name for p in by_species.items] == ["Luna"]

    by_breed = await repository.find_by_search("LORO", 1, 6)
    assert [p.name for p in by_breed.items] == ["Coco"]

    by_owner = await repository.find_by_search("garcía", 1, 6)
    assert [p.name for p in by_owner.items] == ["Max"]
    assert by_owner.items[0].owner_name == "Juan García"

    by_name_fragment = await repository.find_by_search("  un  ", 1, 6)
    assert [p.name for p in by_name_fragment.items] == ["Luna"]


@pytest.mark.asyncio
async def test_search_does_not_match_ciphertext(repository: InMemoryPetRepository):
    await repository.create(_pet(owner_name="Juan García"))
    page = await repository.find_by_search("enc:", 1, 6)
    assert page.items == []
    assert page.info.total == 0


@pytest.mark.asyncio
async def test_search_paginates_matches(repository: InMemoryPetRepository):
    for i in range(4):
        await repository.create(_pet(name=f"Perrito {i}"))
    await repository.create(_pet(name="Michi", species="Gato"))

    page = await repository.find_by_search("perr", 2, 3)
    assert page.info.total == 4
    assert page.info.total_pages == 2
    assert len(page.items) == 1


@pytest.mark.asyncio
async def test_exists_duplicate_is_case_insensitive_and_ignores_age(repository: InMemoryPetRepository):
    created = await repository.create(_pet())
    candidate = Pet(
        name="MAX",
        species="perro",
        breed="golden retriever",
        age=11,
        owner_name="juan garcía",
    )

    assert await repository.exists_duplicate(candidate) is True
    assert await repository.exists_duplicate(candidate, exclude_id=created.id) is False


@pytest.mark.asyncio
async def test_exists_duplicate_requires_all_identity_fields(repository: InMemoryPetRepository):
    await repository.create(_pet())
    assert await repository.exists_duplicate(_pet(owner_name="Otro Dueño")) is False
    assert await repository.exists_duplicate(_pet(breed="Labrador")) is False


@pytest.mark.asyncio
async def test_update_applies_only_supplied_fields(repository: InMemoryPetRepository):
    created = await repository.create(_pet())
    ciphertext_before = repository._pets[created.id].owner_name

    updated = await repository.update(created.id, {"age": 5})

    assert updated.age == 5
    assert updated.name == "Max"
    assert updated.species == "Perro"
    assert updated.breed == "Golden Retriever"
    assert updated.owner_name == "Juan García"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert repository._pets[created.id].owner_name == ciphertext_before


@pytest.mark.asyncio
async def test_update_reencrypts_new_owner_name(clock):
    repository = InMemoryPetRepository(AESFieldCipher("store-secret"), clock=clock)
    created = await repository.create(_pet())

    updated = await repository.update(created.id, {"owner_name": "Ana Martínez"})

    assert updated.owner_name == "Ana Martínez"
    stored = repository._pets[created.id].owner_name
    assert stored != "Ana Martínez"
    assert (await repository.get_by_id(created.id)).owner_name == "Ana Martínez"


@pytest.mark.asyncio
async def test_update_unknown_id_is_not_an_upsert(repository: InMemoryPetRepository):
    assert await repository.update("missing", {"age": 5}) is None
    assert not await repository.exists("missing")


@pytest.mark.asyncio
async def test_update_rejects_unknown_fields(repository: InMemoryPetRepository):
    created = await repository.create(_pet())
    with pytest.raises(ValueError):
        await repository.update(created.id, {"id": "other"})


@pytest.mark.asyncio
async def test_delete_is_idempotent(repository: InMemoryPetRepository):
    created = await repository.create(_pet())

    assert await repository.delete(created.id) is True
    assert await repository.delete(created.id) is False
    assert await repository.get_by_id(created.id) is None
    assert not await repository.exists(created.id)


@pytest.mark.asyncio
async def test_ids_are_never_reused(fake_cipher, clock):
    ids = iter(["pet-1", "pet-1", "pet-2"])
    repository = InMemoryPetRepository(fake_cipher, clock=clock, id_factory=lambda: next(ids))

    first = await repository.create(_pet())
    await repository.delete(first.id)
    second = await repository.create(_pet())

    assert first.id == "pet-1"
    assert second.id == "pet-2"


@pytest.mark.asyncio
async def test_update_never_moves_updated_at_before_created_at(fake_cipher):
    times = iter([
        datetime(2024, 1, 2, tzinfo=timezone.utc),
        datetime(2024, 1, 1, tzinfo=timezone.utc),
    ])
    repository = InMemoryPetRepository(fake_cipher, clock=lambda: next(times))
    created = await repository.create(_pet())

    updated = await repository.update(created.id, {"age": 4})

    assert updated.created_at <= updated.updated_at
    assert updated.updated_at == created.created_at
