import pytest

from contactbook.models.domain.contact_domain import DEFAULT_CATEGORY, ContactUpdate
from contactbook.models.domain.query_domain import TextSearch
from contactbook.repositories.contact_repository import ContactRepository
from contactbook.services.contact_store import ContactNotFoundError, ContactStore
from contactbook.services.latency_simulator import LatencySimulator


@pytest.mark.asyncio
async def test_list_seeds_once_and_is_stable(contact_store, fake_redis):
    first = await contact_store.list_contacts()
    second = await contact_store.list_contacts()

    assert len(first) == 6
    assert [c.id for c in first] == [c.id for c in second]
    assert fake_redis.writes == 1


@pytest.mark.asyncio
async def test_default_listing_sorted_by_last_then_first(contact_store):
    contacts = await contact_store.list_contacts()

    assert [(c.first, c.last) for c in contacts] == [
        ("Khang", "Le"),
        ("Ava", "Nguyen"),
        ("Chi", "Nguyen"),
        ("Leo", "Phan"),
        ("Ella", "Vo"),
        ("Minh", "Vo"),
    ]


@pytest.mark.asyncio
async def test_category_listing_returns_only_that_category(contact_store):
    contacts = await contact_store.list_contacts({"category": "work"})

    assert [c.id for c in contacts] == ["seed-ava-nguyen"]
    assert contacts[0].favorite is True


@pytest.mark.asyncio
async def test_category_listing_matches_mixed_case_storage(contact_store):
    created = await contact_store.create_contact()
    await contact_store.update_contact(created.id, {"last": "Abbott", "category": "Work"})

    contacts = await contact_store.list_contacts({"category": "work"})

    assert [c.last for c in contacts] == ["Abbott", "Nguyen"]


@pytest.mark.asyncio
async def test_string_and_text_search_queries(contact_store):
    by_string = await contact_store.list_contacts("ella")
    by_variant = await contact_store.list_contacts(TextSearch("ella"))

    assert by_string[0].id == "seed-ella-vo"
    assert [c.id for c in by_string] == [c.id for c in by_variant]


@pytest.mark.asyncio
async def test_search_and_category_compose(contact_store):
    assert await contact_store.list_contacts({"q": "phan", "category": "work"}) == []


@pytest.mark.asyncio
async def test_create_then_get_round_trip(contact_store):
    created = await contact_store.create_contact()
    fetched = await contact_store.get_contact(created.id)

    assert fetched == created
    assert created.category == DEFAULT_CATEGORY
    assert created.favorite is False
    assert created.tags == []


@pytest.mark.asyncio
async def test_create_prepends_and_persists(contact_store, repository):
    created = await contact_store.create_contact()

    stored = await repository.load()
    assert stored[0].id == created.id
    assert len(stored) == 7


@pytest.mark.asyncio
async def test_create_skips_colliding_ids(repository):
    ids = iter(["seed-ava-nguyen", "fresh-id"])
    store = ContactStore(repository, id_factory=lambda: next(ids))

    created = await store.create_contact()

    assert created.id == "fresh-id"


@pytest.mark.asyncio
async def test_get_unknown_returns_none(contact_store):
    assert await contact_store.get_contact("missing-id") is None


@pytest.mark.asyncio
async def test_update_merges_normalized_fields(contact_store):
    updated = await contact_store.update_contact(
        "seed-leo-phan",
        {"favorite": "true", "tags": "health, , clinic", "twitterHandle": "@leo", "bogus": 1},
    )

    assert updated.favorite is True
    assert updated.tags == ["health", "clinic"]
    assert updated.twitter_handle == "leo"
    # untouched fields survive the merge
    assert updated.company == "MediPlus Clinic"
    assert updated.category == "services"

    fetched = await contact_store.get_contact("seed-leo-phan")
    assert fetched == updated


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [1, 1.0, ["x"], "yes"])
async def test_update_non_truthy_favorite_clears_flag(contact_store, value):
    updated = await contact_store.update_contact("seed-ava-nguyen", {"favorite": value})

    assert updated.favorite is False
    assert (await contact_store.get_contact("seed-ava-nguyen")).favorite is False


@pytest.mark.asyncio
async def test_update_keeps_valid_tags_from_mixed_list(contact_store):
    updated = await contact_store.update_contact(
        "seed-khang-le", {"tags": ["teacher", None, "  parent "]}
    )

    assert updated.tags == ["teacher", "parent"]


@pytest.mark.asyncio
async def test_update_accepts_schema_instance(contact_store):
    updated = await contact_store.update_contact("seed-khang-le", ContactUpdate(category="all"))

    assert updated.category == DEFAULT_CATEGORY


@pytest.mark.asyncio
async def test_update_missing_raises_and_leaves_collection_unchanged(contact_store, repository):
    before = await contact_store.list_all_contacts()

    with pytest.raises(ContactNotFoundError) as exc_info:
        await contact_store.update_contact("missing-id", {"favorite": True})

    assert exc_info.value.contact_id == "missing-id"
    assert await repository.load() == before


@pytest.mark.asyncio
async def test_delete_missing_returns_false(contact_store):
    before = await contact_store.list_all_contacts()

    assert await contact_store.delete_contact("missing-id") is False
    assert await contact_store.list_all_contacts() == before


@pytest.mark.asyncio
async def test_delete_existing_removes_exactly_one(contact_store):
    before = await contact_store.list_all_contacts()

    assert await contact_store.delete_contact("seed-minh-vo") is True

    after = await contact_store.list_all_contacts()
    assert len(after) == len(before) - 1
    assert "seed-minh-vo" not in {c.id for c in after}


@pytest.mark.asyncio
async def test_list_results_are_not_live_references(contact_store):
    contacts = await contact_store.list_contacts()
    contacts[0].first = "Changed"
    contacts.clear()

    fresh = await contact_store.list_contacts()
    assert len(fresh) == 6
    assert fresh[0].first == "Khang"


@pytest.mark.asyncio
async def test_list_all_is_unsorted_storage_order(contact_store):
    created = await contact_store.create_contact()

    contacts = await contact_store.list_all_contacts()

    assert contacts[0].id == created.id
    assert contacts[1].id == "seed-ava-nguyen"


@pytest.mark.asyncio
async def test_mutations_reset_latency_cache(repository):
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    latency = LatencySimulator(max_delay_ms=100, rng=lambda: 1.0, sleep=fake_sleep)
    store = ContactStore(repository, latency=latency)

    await store.get_contact("seed-ava-nguyen")
    await store.get_contact("seed-ava-nguyen")
    assert len(sleeps) == 1

    await store.update_contact("seed-ava-nguyen", {"notes": "hi"})
    assert len(sleeps) == 2

    await store.get_contact("seed-ava-nguyen")
    assert len(sleeps) == 3

    await store.delete_contact("seed-leo-phan")
    await store.get_contact("seed-ava-nguyen")
    assert len(sleeps) == 4


@pytest.mark.asyncio
async def test_stores_sharing_a_backend_see_latest_write(repository, fake_redis):
    store_a = ContactStore(repository)
    store_b = ContactStore(ContactRepository(fake_redis))

    await store_a.update_contact("seed-ava-nguyen", {"notes": "from a"})
    await store_b.update_contact("seed-ava-nguyen", {"notes": "from b"})

    contact = await store_a.get_contact("seed-ava-nguyen")
    assert contact.notes == "from b"
