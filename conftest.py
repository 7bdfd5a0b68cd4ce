from __future__ import annotations

import pytest
from django.contrib.auth.models import Group
from django.contrib.auth.models import Permission
from rest_framework.test import APIClient

from common.tests import factories
from common.tests.util import Dates


@pytest.fixture
def date_ranges() -> Dates:
    return Dates()


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def pricing_group(db) -> Group:
    group = factories.UserGroupFactory.create(name="Pricing")

    for app_label, codename in [
        ("quotations", "view_quotationrequest"),
        ("quotations", "view_quotationcommodityitem"),
        ("carriers", "view_carriersurchargerule"),
    ]:
        group.permissions.add(
            Permission.objects.get(
                content_type__app_label=app_label,
                codename=codename,
            ),
        )

    return group


@pytest.fixture
def valid_user(db, pricing_group):
    user = factories.UserFactory.create()
    pricing_group.user_set.add(user)
    return user


@pytest.fixture
def valid_user_api_client(api_client, valid_user) -> APIClient:
    api_client.force_login(valid_user)
    return api_client


@pytest.fixture
def carrier(db):
    return factories.ShippingCarrierFactory.create(code="GRIMALDI", name="Grimaldi")


@pytest.fixture
def port(db):
    return factories.PortFactory.create(code="LOS", name="Lagos", country="Nigeria")


@pytest.fixture
def quotation(carrier, port):
    return factories.QuotationRequestFactory.create(carrier=carrier, pod_port=port)


@pytest.fixture
def add_item(quotation):
    """Add a cargo line to the quotation, numbering lines in the order they
    are added."""

    def add(category, **kwargs):
        kwargs.setdefault(
            "line_number",
            quotation.commodity_items.count() + 1,
        )
        return factories.QuotationCommodityItemFactory.create(
            quotation=quotation,
            category=category,
            **kwargs,
        )

    return add
