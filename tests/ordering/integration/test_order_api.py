"""Integration tests for the /orders and /track endpoints."""

from ordering.order.order import Order
from protean import current_domain

ORDER_BODY = {
    "product_name": "Sasya Mantra Herbal Hair Growth Oil",
    "quantity": 2,
    "price": 100.0,
    "fullname": "Asha Rao",
    "phone": "9876543210",
    "address": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "zip_code": "560001",
    "payment_method": "cod",
}


def _place(api, account, **overrides):
    response = api.post("/orders", json={**ORDER_BODY, **overrides}, headers=account["headers"])
    assert response.status_code == 201, response.text
    return response.json()


class TestPlaceOrderEndpoint:
    def test_place_order(self, api, make_account):
        shopper = make_account()

        response = api.post("/orders", json=ORDER_BODY, headers=shopper["headers"])

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["user_id"] == shopper["user_id"]
        assert body["total"] == 200.0
        assert body["tracking_number"].startswith("SM-")

        order = current_domain.repository_for(Order).get(body["id"])
        assert order.fullname == "Asha Rao"

    def test_requires_a_session(self, api):
        response = api.post("/orders", json=ORDER_BODY)

        assert response.status_code == 401
        assert current_domain.repository_for(Order).list_orders() == []

    def test_missing_field(self, api, make_account):
        shopper = make_account()

        response = api.post("/orders", json={**ORDER_BODY, "phone": ""}, headers=shopper["headers"])

        assert response.status_code == 400
        assert "phone" in response.json()["error"]

    def test_user_id_in_body_is_ignored(self, api, make_account):
        shopper = make_account()

        body = _place(api, shopper, user_id="someone-else")

        assert body["user_id"] == shopper["user_id"]


class TestOrderDiscounts:
    def test_code_grants_its_share(self, api, make_account):
        body = _place(api, make_account(), discount_code="save10", discount_total=20.0)

        assert body["discount_code"] == "SAVE10"
        assert body["discount_total"] == 20.0
        assert body["total"] == 180.0

    def test_discount_without_a_code_is_rejected(self, api, make_account):
        shopper = make_account()

        response = api.post(
            "/orders",
            json={**ORDER_BODY, "quantity": 5, "discount_total": 500.0},
            headers=shopper["headers"],
        )

        assert response.status_code == 400
        assert "discount_code" in response.json()["error"]
        assert current_domain.repository_for(Order).list_orders() == []

    def test_discount_beyond_what_the_code_allows(self, api, make_account):
        shopper = make_account()

        response = api.post(
            "/orders",
            json={**ORDER_BODY, "quantity": 5, "discount_code": "SAVE50", "discount_total": 500.0},
            headers=shopper["headers"],
        )

        assert response.status_code == 400
        assert "discount_total" in response.json()["error"]
        assert current_domain.repository_for(Order).list_orders() == []

    def test_unknown_code(self, api, make_account):
        shopper = make_account()

        response = api.post(
            "/orders",
            json={**ORDER_BODY, "discount_code": "FREESTUFF", "discount_total": 10.0},
            headers=shopper["headers"],
        )

        assert response.status_code == 400
        assert "discount_code" in response.json()["error"]


class TestListOrdersEndpoint:
    def test_shoppers_see_only_their_own_orders(self, api, make_account):
        asha = make_account()
        ravi = make_account()
        own = _place(api, asha)
        _place(api, ravi)

        response = api.get("/orders", params={"user_id": ravi["user_id"]}, headers=asha["headers"])

        assert response.status_code == 200
        assert [order["id"] for order in response.json()] == [own["id"]]

    def test_admin_sees_everything(self, api, make_account):
        admin = make_account(role="admin")
        _place(api, make_account())
        _place(api, make_account())

        response = api.get("/orders", headers=admin["headers"])

        assert len(response.json()) == 2

    def test_admin_filters_by_user_and_status(self, api, make_account):
        admin = make_account(role="admin")
        asha = make_account()
        wanted = _place(api, asha)
        _place(api, make_account())

        by_user = api.get("/orders", params={"user_id": asha["user_id"]}, headers=admin["headers"]).json()
        by_status = api.get("/orders", params={"status": "shipped"}, headers=admin["headers"]).json()

        assert [order["id"] for order in by_user] == [wanted["id"]]
        assert by_status == []

    def test_filter_by_tracking_number(self, api, make_account):
        asha = make_account()
        order = _place(api, asha)
        _place(api, asha)

        response = api.get("/orders", params={"tracking_number": order["tracking_number"]}, headers=asha["headers"])

        assert [o["id"] for o in response.json()] == [order["id"]]

    def test_requires_a_session(self, api):
        assert api.get("/orders").status_code == 401


class TestGetOrderEndpoint:
    def test_owner(self, api, make_account):
        asha = make_account()
        order = _place(api, asha)

        response = api.get(f"/orders/{order['id']}", headers=asha["headers"])

        assert response.status_code == 200
        assert response.json()["id"] == order["id"]

    def test_someone_elses_order_is_not_found(self, api, make_account):
        order = _place(api, make_account())

        response = api.get(f"/orders/{order['id']}", headers=make_account()["headers"])

        assert response.status_code == 404

    def test_admin(self, api, make_account):
        order = _place(api, make_account())

        response = api.get(f"/orders/{order['id']}", headers=make_account(role="admin")["headers"])

        assert response.status_code == 200


class TestUpdateOrderEndpoint:
    def test_admin_changes_status_and_tracking(self, api, make_account):
        admin = make_account(role="admin")
        order = _place(api, make_account())

        response = api.patch(
            "/orders",
            json={"id": order["id"], "status": "processing", "tracking_number": "DTDC-42"},
            headers=admin["headers"],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "processing"
        assert body["tracking_number"] == "DTDC-42"

    def test_non_admin_status_change_is_forbidden_and_order_unchanged(self, api, make_account):
        asha = make_account()
        order = _place(api, asha)

        response = api.patch(
            "/orders",
            json={"id": order["id"], "status": "completed", "quantity": 5},
            headers=asha["headers"],
        )

        assert response.status_code == 403
        stored = current_domain.repository_for(Order).get(order["id"])
        assert stored.status == "pending"
        assert stored.quantity == 2

    def test_owner_edits_pending_order(self, api, make_account):
        asha = make_account()
        order = _place(api, asha)

        response = api.patch("/orders", json={"id": order["id"], "quantity": 3}, headers=asha["headers"])

        assert response.status_code == 200
        assert response.json()["quantity"] == 3
        assert response.json()["total"] == 300.0

    def test_owner_cannot_edit_after_pending(self, api, make_account):
        admin = make_account(role="admin")
        asha = make_account()
        order = _place(api, asha)
        api.patch("/orders", json={"id": order["id"], "status": "processing"}, headers=admin["headers"])

        response = api.patch("/orders", json={"id": order["id"], "quantity": 1}, headers=asha["headers"])

        assert response.status_code == 400

    def test_cannot_edit_someone_elses_order(self, api, make_account):
        order = _place(api, make_account())

        response = api.patch("/orders", json={"id": order["id"], "quantity": 1}, headers=make_account()["headers"])

        assert response.status_code == 403

    def test_invalid_transition(self, api, make_account):
        admin = make_account(role="admin")
        order = _place(api, make_account())

        response = api.patch("/orders", json={"id": order["id"], "status": "completed"}, headers=admin["headers"])

        assert response.status_code == 400
        assert "status" in response.json()["error"]

    def test_missing_id(self, api, make_account):
        response = api.patch("/orders", json={"status": "processing"}, headers=make_account(role="admin")["headers"])

        assert response.status_code == 400
        assert response.json() == {"error": {"id": ["Order id is required"]}}

    def test_unknown_order(self, api, make_account):
        response = api.patch(
            "/orders",
            json={"id": "missing", "status": "processing"},
            headers=make_account(role="admin")["headers"],
        )

        assert response.status_code == 404


class TestDeleteOrderEndpoint:
    def test_admin_deletes_by_query_string(self, api, make_account):
        order = _place(api, make_account())

        response = api.delete("/orders", params={"id": order["id"]}, headers=make_account(role="admin")["headers"])

        assert response.status_code == 200
        assert current_domain.repository_for(Order).list_orders() == []

    def test_admin_deletes_by_json_body(self, api, make_account):
        order = _place(api, make_account())

        response = api.request(
            "DELETE", "/orders", json={"id": order["id"]}, headers=make_account(role="admin")["headers"]
        )

        assert response.status_code == 200

    def test_non_admin_is_forbidden(self, api, make_account):
        asha = make_account()
        order = _place(api, asha)

        response = api.delete("/orders", params={"id": order["id"]}, headers=asha["headers"])

        assert response.status_code == 403
        assert current_domain.repository_for(Order).get(order["id"]) is not None

    def test_missing_id(self, api, make_account):
        response = api.delete("/orders", headers=make_account(role="admin")["headers"])

        assert response.status_code == 400

    def test_unknown_order(self, api, make_account):
        response = api.delete("/orders", params={"id": "missing"}, headers=make_account(role="admin")["headers"])

        assert response.status_code == 404


class TestTrackEndpoint:
    def test_track_without_a_session(self, api, make_account):
        order = _place(api, make_account())

        response = api.post("/track", json={"tracking_number": order["tracking_number"], "phone": "98765 43210"})

        assert response.status_code == 200
        tracked = response.json()["order"]
        assert tracked["id"] == order["id"]
        assert tracked["status"] == "pending"
        assert "phone" not in tracked
        assert "address" not in tracked

    def test_wrong_phone(self, api, make_account):
        order = _place(api, make_account())

        response = api.post("/track", json={"tracking_number": order["tracking_number"], "phone": "1111111111"})

        assert response.status_code == 404

    def test_both_fields_required(self, api):
        response = api.post("/track", json={"tracking_number": " "})

        assert response.status_code == 400
        assert set(response.json()["error"]) == {"tracking_number", "phone"}
