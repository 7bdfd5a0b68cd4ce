import pytest
from django.urls import reverse

from carriers.constants import RelationshipType

pytestmark = pytest.mark.django_db


def test_quotations_need_authentication(api_client, quotation):
    response = api_client.get(reverse("quotation-list"))

    assert response.status_code in (401, 403)


def test_quotation_list(valid_user_api_client, quotation):
    response = valid_user_api_client.get(reverse("quotation-list"))

    assert response.status_code == 200
    (data,) = response.json()["results"]
    assert data["request_number"] == quotation.request_number
    assert data["carrier"] == "GRIMALDI"
    assert data["pod_port"] == "LOS"


def test_commodity_items(valid_user_api_client, quotation, add_item):
    truck = add_item("truck")
    trailer = add_item(
        "trailer",
        relationship_type=RelationshipType.CONNECTED,
        related_item_id=truck.pk,
    )

    response = valid_user_api_client.get(
        reverse("commodity_item-list", kwargs={"quotation_id": quotation.pk}),
    )

    assert response.status_code == 200
    assert [(i["id"], i["related_item_id"]) for i in response.json()] == [
        (truck.pk, None),
        (trailer.pk, truck.pk),
    ]


def test_commodity_items_of_unknown_quotation(valid_user_api_client):
    response = valid_user_api_client.get(
        reverse("commodity_item-list", kwargs={"quotation_id": 424242}),
    )

    assert response.status_code == 404


def test_towing_decision(valid_user_api_client, quotation, add_item):
    truck = add_item("truckhead")
    trailer = add_item(
        "trailer",
        relationship_type=RelationshipType.CONNECTED,
        related_item_id=truck.pk,
    )

    response = valid_user_api_client.get(
        reverse(
            "commodity_item-towing",
            kwargs={"quotation_id": quotation.pk, "pk": trailer.pk},
        ),
    )

    assert response.status_code == 200
    assert response.json() == {
        "applies": False,
        "reason": "Connected to truckhead on line 1",
        "category": "trailer",
        "commodity_item_id": trailer.pk,
        "inspected": [
            {
                "id": trailer.pk,
                "line_number": 2,
                "category": "trailer",
                "role": "self",
            },
            {
                "id": truck.pk,
                "line_number": 1,
                "category": "truckhead",
                "role": "connected_to",
            },
        ],
    }


def test_towing_decision_for_item_of_another_quotation(
    valid_user_api_client,
    quotation,
    add_item,
):
    trailer = add_item("trailer")

    response = valid_user_api_client.get(
        reverse(
            "commodity_item-towing",
            kwargs={"quotation_id": quotation.pk + 1, "pk": trailer.pk},
        ),
    )

    assert response.status_code == 404
