"""
Tests for the document store adapter over SQLModel tables.
"""
from datetime import datetime, timezone
import pytest
from storefront.core.clock import utc_now
from storefront.core.errors import LimitExceeded, StoreError
from storefront.core.identifiers import new_object_id
from storefront.db.store import DocumentStore
from storefront.models.cart import CartItem
from storefront.models.product import Product


@pytest.fixture
def product_store(session):
    return DocumentStore(session, Product)


def make_product(name="Hammare", price=199.0):
    return Product(name=name, price=price, image="/images/hammare.webp", amount_in_stock=5)


class TestFindAndInsert:

    def test_find_one_returns_none_when_missing(self, product_store):
        assert product_store.find_one(id=new_object_id()) is None

    def test_insert_one_assigns_id_and_persists(self, product_store):
        product = product_store.insert_one(make_product())

        assert len(product.id) == 24
        found = product_store.find_one(id=product.id)
        assert found is not None
        assert found.name == "Hammare"

    def test_find_filters_by_equality(self, cart_store, user_id):
        other_user = new_object_id()
        cart_store.insert_one(CartItem(user_id=user_id, product_id=new_object_id(), amount=1))
        cart_store.insert_one(CartItem(user_id=user_id, product_id=new_object_id(), amount=2))
        cart_store.insert_one(CartItem(user_id=other_user, product_id=new_object_id(), amount=3))

        assert len(cart_store.find()) == 3
        assert sorted(item.amount for item in cart_store.find(user_id=user_id)) == [1, 2]

    def test_search_is_case_insensitive_substring(self, product_store):
        product_store.insert_one(make_product("Skruvmejsel"))
        product_store.insert_one(make_product("Hammare"))

        names = [p.name for p in product_store.search("name", "MEJS")]
        assert names == ["Skruvmejsel"]

    @pytest.mark.parametrize("text, expected", [("%", ["50% rabatt"]), ("_", ["lim_stift"]), ("\\", [])])
    def test_search_treats_wildcards_literally(self, product_store, text, expected):
        for name in ("Hammare", "50% rabatt", "lim_stift"):
            product_store.insert_one(make_product(name))

        assert [p.name for p in product_store.search("name", text)] == expected


def as_utc(value: datetime) -> datetime:
    # SQLite hands stored timestamps back without an offset
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class TestTimestamps:

    def test_insert_stores_utc_timestamps(self, session, product_store):
        before = utc_now()
        product = product_store.insert_one(make_product())
        after = utc_now()

        session.expire_all()
        stored = product_store.find_one(id=product.id)

        assert before <= as_utc(stored.created_at) <= after
        assert before <= as_utc(stored.updated_at) <= after

    def test_update_moves_updated_at(self, session, product_store):
        product = product_store.insert_one(make_product())
        created_at = as_utc(product.created_at)

        product_store.update_one({"id": product.id}, {"price": 249.0})
        session.expire_all()
        stored = product_store.find_one(id=product.id)

        assert as_utc(stored.created_at) == created_at
        assert as_utc(stored.updated_at) >= created_at

    def test_upsert_writes_timestamps(self, cart_store, user_id, product_id):
        keys = {"user_id": user_id, "product_id": product_id}
        cart_store.upsert_increment(keys, "amount", 1)
        item, _ = cart_store.upsert_increment(keys, "amount", 1)

        assert item.created_at is not None
        assert as_utc(item.updated_at) >= as_utc(item.created_at)


class TestUpdateAndDelete:

    def test_update_one_reports_matched_and_modified(self, product_store):
        product = product_store.insert_one(make_product())

        result = product_store.update_one({"id": product.id}, {"price": 249.0})

        assert result.matched_count == 1
        assert result.modified_count == 1
        assert product_store.find_one(id=product.id).price == 249.0

    def test_update_one_without_changes(self, product_store):
        product = product_store.insert_one(make_product())

        result = product_store.update_one({"id": product.id}, {"price": 199.0})

        assert result.matched_count == 1
        assert result.modified_count == 0

    def test_update_one_on_missing_record(self, product_store):
        result = product_store.update_one({"id": new_object_id()}, {"price": 1.0})
        assert result.matched_count == 0
        assert result.modified_count == 0

    def test_delete_one(self, product_store):
        product = product_store.insert_one(make_product())

        assert product_store.delete_one(id=product.id).deleted_count == 1
        assert product_store.delete_one(id=product.id).deleted_count == 0
        assert product_store.find_one(id=product.id) is None

    def test_delete_many_is_scoped_by_filter(self, cart_store, user_id):
        other_user = new_object_id()
        for owner in (user_id, user_id, other_user):
            cart_store.insert_one(CartItem(user_id=owner, product_id=new_object_id(), amount=1))

        assert cart_store.delete_many(user_id=user_id).deleted_count == 2
        assert [item.user_id for item in cart_store.find()] == [other_user]


class TestUpsertIncrement:

    def test_first_call_creates(self, cart_store, user_id, product_id):
        item, created = cart_store.upsert_increment({"user_id": user_id, "product_id": product_id}, "amount", 2)

        assert created is True
        assert item.amount == 2
        assert len(item.id) == 24

    def test_second_call_accumulates_on_same_row(self, cart_store, user_id, product_id):
        keys = {"user_id": user_id, "product_id": product_id}
        first, _ = cart_store.upsert_increment(keys, "amount", 2)
        second, created = cart_store.upsert_increment(keys, "amount", 3)

        assert created is False
        assert second.id == first.id
        assert second.amount == 5
        assert len(cart_store.find()) == 1

    def test_limit_blocks_increment_past_it(self, session, cart_store, user_id, product_id):
        keys = {"user_id": user_id, "product_id": product_id}
        cart_store.upsert_increment(keys, "amount", 5, limit=10)

        with pytest.raises(LimitExceeded) as exc_info:
            cart_store.upsert_increment(keys, "amount", 6, limit=10)
        assert exc_info.value.message == "Invalid amount"

        session.expire_all()
        assert cart_store.find_one(**keys).amount == 5

        item, created = cart_store.upsert_increment(keys, "amount", 5, limit=10)
        assert created is False
        assert item.amount == 10

    def test_limit_rejects_oversized_first_insert(self, cart_store, user_id, product_id):
        with pytest.raises(LimitExceeded):
            cart_store.upsert_increment({"user_id": user_id, "product_id": product_id}, "amount", 11, limit=10)
        assert cart_store.find() == []

    def test_unique_pair_is_enforced_by_the_table(self, cart_store, user_id, product_id):
        cart_store.insert_one(CartItem(user_id=user_id, product_id=product_id, amount=1))

        with pytest.raises(StoreError) as exc_info:
            cart_store.insert_one(CartItem(user_id=user_id, product_id=product_id, amount=1))
        assert exc_info.value.message == "Error inserting record"
        # The session is usable again after the rollback
        assert len(cart_store.find()) == 1


def test_database_failures_become_store_errors(engine, cart_store):
    CartItem.__table__.drop(engine)

    with pytest.raises(StoreError) as exc_info:
        cart_store.find()
    assert "cart" in exc_info.value.detail
