"""
Contract tests for the submission store.

Every test here runs against both the in-memory and the SQL backend
(see the `store` fixture in conftest.py).
"""

from marketing_service.shared.storage.models import ContactCreate, NewsletterCreate


def make_contact(**overrides):
    fields = {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@school.edu",
        "school": "Lincoln Elementary",
    }
    fields.update(overrides)
    return ContactCreate(**fields)


class TestContacts:

    def test_fresh_store_lists_no_contacts(self, store):
        assert store.list_contacts() == []

    def test_create_contact_assigns_id_and_timestamp(self, store):
        contact = store.create_contact(make_contact())

        assert contact.id == 1
        assert contact.first_name == "Jane"
        assert contact.last_name == "Doe"
        assert contact.email == "jane@school.edu"
        assert contact.school == "Lincoln Elementary"
        assert contact.role is None
        assert contact.student_count is None
        assert contact.message is None
        assert contact.created_at is not None

    def test_identical_contacts_are_not_deduplicated(self, store):
        first = store.create_contact(make_contact())
        second = store.create_contact(make_contact())

        assert first.id == 1
        assert second.id == 2
        assert len(store.list_contacts()) == 2

    def test_ids_strictly_increase_and_listing_matches(self, store):
        created = [
            store.create_contact(make_contact(first_name=f"Teacher{i}", role="teacher"))
            for i in range(10)
        ]

        ids = [c.id for c in created]
        assert ids == sorted(set(ids))
        assert store.list_contacts() == created

    def test_optional_fields_are_kept(self, store):
        contact = store.create_contact(
            make_contact(role="principal", student_count="201-500", message="Please call me")
        )

        stored = store.list_contacts()[0]
        assert stored == contact
        assert stored.role == "principal"
        assert stored.student_count == "201-500"
        assert stored.message == "Please call me"

    def test_store_does_not_validate_email(self, store):
        contact = store.create_contact(make_contact(email="not-an-email"))
        assert contact.email == "not-an-email"

    def test_listing_is_a_snapshot(self, store):
        store.create_contact(make_contact())
        snapshot = store.list_contacts()

        store.create_contact(make_contact(first_name="John"))

        assert len(snapshot) == 1
        assert len(store.list_contacts()) == 2


class TestNewsletter:

    def test_fresh_store_lists_no_subscriptions(self, store):
        assert store.list_newsletter_subscriptions() == []

    def test_subscribe_twice_returns_same_record(self, store):
        first = store.subscribe_newsletter(NewsletterCreate(email="x@y.com"))
        second = store.subscribe_newsletter(NewsletterCreate(email="x@y.com"))

        assert first.id == 1
        assert second.id == first.id
        assert second.created_at == first.created_at
        assert second.email == "x@y.com"
        assert store.list_newsletter_subscriptions() == [first]

    def test_distinct_emails_get_new_ids(self, store):
        a = store.subscribe_newsletter(NewsletterCreate(email="a@x.com"))
        b = store.subscribe_newsletter(NewsletterCreate(email="b@x.com"))
        again = store.subscribe_newsletter(NewsletterCreate(email="a@x.com"))
        c = store.subscribe_newsletter(NewsletterCreate(email="c@x.com"))

        assert [a.id, b.id, again.id, c.id] == [1, 2, 1, 3]
        assert [s.email for s in store.list_newsletter_subscriptions()] == [
            "a@x.com", "b@x.com", "c@x.com"
        ]

    def test_emails_compared_exactly(self, store):
        lower = store.subscribe_newsletter(NewsletterCreate(email="a@x.com"))
        upper = store.subscribe_newsletter(NewsletterCreate(email="A@x.com"))

        assert lower.id != upper.id
        assert len(store.list_newsletter_subscriptions()) == 2

    def test_listing_never_contains_duplicate_emails(self, store):
        for email in ["a@x.com", "b@x.com", "a@x.com", "b@x.com", "a@x.com"]:
            store.subscribe_newsletter(NewsletterCreate(email=email))

        emails = [s.email for s in store.list_newsletter_subscriptions()]
        assert len(emails) == len(set(emails)) == 2


class TestIsolation:

    def test_contacts_do_not_touch_newsletter(self, store):
        store.create_contact(make_contact())
        store.create_contact(make_contact())

        assert store.list_newsletter_subscriptions() == []

    def test_newsletter_does_not_touch_contacts(self, store):
        store.subscribe_newsletter(NewsletterCreate(email="jane@school.edu"))

        assert store.list_contacts() == []

    def test_id_counters_are_independent(self, store):
        store.create_contact(make_contact())
        store.create_contact(make_contact())
        subscription = store.subscribe_newsletter(NewsletterCreate(email="jane@school.edu"))
        contact = store.create_contact(make_contact())

        assert subscription.id == 1
        assert contact.id == 3
