"""Service-level tests for saved searches."""

from decimal import Decimal

import pytest

from estatemls.core.errors import NotFoundError, ValidationError
from estatemls.models import PropertyStatus
from estatemls.services import saved_searches


@pytest.mark.unit
def test_empty_filters_are_dropped(db, buyer):
    search = saved_searches.create_saved_search(
        db, buyer, name="Houses", search_params={"property_type": "house", "location": None}
    )
    assert search.search_params == {"property_type": "house"}
    assert search.notifications_enabled is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "params",
    [{"min_price": -1}, {"max_price": "-0.01"}, {"min_price": 200, "max_price": 100}],
)
def test_invalid_price_filters(db, buyer, params):
    with pytest.raises(ValidationError):
        saved_searches.create_saved_search(db, buyer, name="bad", search_params=params)


@pytest.mark.unit
def test_results_default_to_published(db, buyer, agent, make_property):
    published = make_property(agent, property_type="land")
    draft = make_property(agent, status=PropertyStatus.DRAFT, property_type="land")
    search = saved_searches.create_saved_search(db, buyer, name="Land", search_params={"property_type": "land"})
    assert [p.id for p in saved_searches.run_saved_search(db, buyer, search.id)] == [published.id]

    saved_searches.update_saved_search(
        db, buyer, search.id, {"search_params": {"property_type": "land", "status": "draft"}}
    )
    assert [p.id for p in saved_searches.run_saved_search(db, buyer, search.id)] == [draft.id]


@pytest.mark.unit
def test_price_filters_survive_storage(db, buyer, agent, make_property):
    cheap = make_property(agent, price=Decimal("99999.99"))
    make_property(agent, price=Decimal("100000.00"))
    search = saved_searches.create_saved_search(
        db, buyer, name="Under 100k", search_params={"max_price": 99999.99}
    )
    assert [p.id for p in saved_searches.run_saved_search(db, buyer, search.id)] == [cheap.id]


@pytest.mark.unit
def test_scoped_to_owner(db, buyer, make_user):
    search = saved_searches.create_saved_search(db, buyer, name="Mine")
    with pytest.raises(NotFoundError):
        saved_searches.get_saved_search(db, make_user(), search.id)
