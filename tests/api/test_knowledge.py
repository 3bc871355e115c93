from __future__ import annotations

from kbase import repository
from kbase.models import KnowledgeItemDraft


def _create(client, tenant_id: str, **fields):
    payload = {"question": "How do I pay?", "answer": "By card"}
    payload.update(fields)
    return client.post(f"/api/tenants/{tenant_id}/items", json=payload)


def test_create_item_applies_row_rules(client, session, tenant) -> None:
    response = _create(client, tenant.id, question="  How do I pay? ", category=" ")

    assert response.status_code == 201
    body = response.json()
    assert body["question"] == "How do I pay?"
    assert body["category"] == "General"
    assert body["views"] == 0
    assert body["tenant_id"] == tenant.id
    assert repository.count_knowledge_items(session, tenant.id) == 1


def test_create_item_requires_question_and_answer(client, session, tenant) -> None:
    response = _create(client, tenant.id, answer="   ")

    assert response.status_code == 422
    assert "Answer is required" in response.text
    assert repository.count_knowledge_items(session, tenant.id) == 0


def test_get_update_and_delete_item(client, tenant) -> None:
    item_id = _create(client, tenant.id).json()["id"]

    updated = client.patch(
        f"/api/tenants/{tenant.id}/items/{item_id}", json={"answer": "Card or transfer"}
    )
    fetched = client.get(f"/api/tenants/{tenant.id}/items/{item_id}")
    deleted = client.delete(f"/api/tenants/{tenant.id}/items/{item_id}")
    missing = client.get(f"/api/tenants/{tenant.id}/items/{item_id}")

    assert updated.status_code == 200
    assert updated.json()["answer"] == "Card or transfer"
    assert fetched.json()["question"] == "How do I pay?"
    assert deleted.status_code == 204
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Question not found."


def test_update_rejects_blank_question(client, tenant) -> None:
    item_id = _create(client, tenant.id).json()["id"]

    response = client.patch(f"/api/tenants/{tenant.id}/items/{item_id}", json={"question": " "})

    assert response.status_code == 422


def test_unknown_item_is_404_in_requested_language(client, tenant) -> None:
    response = client.delete(f"/api/tenants/{tenant.id}/items/missing", params={"lang": "ar"})

    assert response.status_code == 404
    assert response.json()["detail"] == "السؤال غير موجود."


def test_item_of_another_tenant_is_not_reachable(client, session, tenant) -> None:
    other = repository.create_tenant(session, name="Other", slug="other")
    item = repository.create_knowledge_item(
        session, other.id, KnowledgeItemDraft(question="Q", answer="A")
    )

    response = client.patch(f"/api/tenants/{tenant.id}/items/{item.id}", json={"answer": "X"})

    assert response.status_code == 404


def test_recording_views_increments_counter(client, tenant) -> None:
    item_id = _create(client, tenant.id).json()["id"]

    client.post(f"/api/tenants/{tenant.id}/items/{item_id}/views")
    response = client.post(f"/api/tenants/{tenant.id}/items/{item_id}/views")

    assert response.status_code == 200
    assert response.json() == {"id": item_id, "views": 2}


def test_categories_endpoint(client, tenant) -> None:
    _create(client, tenant.id, category="Billing", subcategory="Cards")
    _create(client, tenant.id, question="Refunds?", category="Billing", subcategory="Refunds")
    _create(client, tenant.id, question="Login?")

    response = client.get(f"/api/tenants/{tenant.id}/categories")

    assert response.status_code == 200
    assert response.json() == [
        {"category": "Billing", "subcategories": ["Cards", "Refunds"], "item_count": 2},
        {"category": "General", "subcategories": [], "item_count": 1},
    ]
