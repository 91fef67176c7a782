import json

import pytest

from conftest import FakeNotifier, make_image, make_product
from pharmacy_admin.admin.controller import (
    DELETE_CONFIRMATION,
    PRODUCT_ADDED,
    PRODUCT_DELETED,
    PRODUCT_UPDATED,
    ProductAdminController,
)
from pharmacy_admin.admin.draft import ProductDraft
from pharmacy_admin.admin.validation import MISSING_IMAGE_FILE_MESSAGE, REQUIRED_FIELDS_MESSAGE
from pharmacy_admin.error_handler import NETWORK_ERROR_MESSAGE
from pharmacy_admin.integrations.clients.mocks.local_product_catalogues import LocalProductCatalogueClient
from pharmacy_admin.integrations.contracts.interfaces import PRODUCT_CATEGORIES


def ids(products):
    return [p.id for p in products]


def fill_new_product(controller, **overrides):
    controller.open_create()
    values = {
        "name": "Joint Support",
        "category": "Health & Wellness",
        "description": "Glucosamine chews",
        "price": "19.90",
        "stockQuantity": "12",
        "brand": "VetCare",
        "petType": "Dog",
    }
    values.update(overrides)
    for name, value in values.items():
        controller.editor.set_field(name, value)
    controller.editor.update_image_slot(0, "https://example.com/joint.jpg")


def mutating_calls(client):
    return [c for c in client.calls if c["operation"] in ("create_product", "update_product", "delete_product")]


@pytest.mark.asyncio
async def test_load_replaces_collection_and_clears_loading_flag(controller, client):
    seen = []
    original = client.list_products

    async def spy():
        seen.append(controller.loading)
        return await original()

    client.list_products = spy

    await controller.load()

    assert seen == [True]
    assert controller.loading is False
    assert ids(controller.collection) == ["1", "2", "3"]


@pytest.mark.parametrize("status_code", [500, None])
@pytest.mark.asyncio
async def test_load_failure_empties_collection_silently(controller, client, notifier, status_code):
    await controller.load()
    client.fail_next("boom", status_code=status_code)

    await controller.load()

    assert len(controller.collection) == 0
    assert controller.loading is False
    assert notifier.alerts == []


@pytest.mark.asyncio
async def test_summary_and_filters_follow_collection(controller):
    await controller.load()

    controller.set_stock_filter("low")
    assert ids(controller.visible_products) == ["1", "2"]
    controller.set_search("salmon")
    assert ids(controller.visible_products) == ["2"]
    controller.set_search("")
    controller.set_category("Medicine")
    controller.set_stock_filter("out")
    assert ids(controller.visible_products) == ["1"]

    summary = controller.stock_summary
    assert (summary.in_stock, summary.low_stock, summary.out_of_stock) == (2, 2, 1)


@pytest.mark.asyncio
async def test_create_appends_server_record_and_closes_form(controller, client, notifier):
    await controller.load()
    fill_new_product(controller)

    assert await controller.submit() is True

    assert len(controller.collection) == 4
    created = controller.collection.to_list()[-1]
    assert created.name == "Joint Support"
    assert created.images == ["https://example.com/joint.jpg"]
    assert created.pet_type == ["Dog"]
    assert notifier.alerts == [PRODUCT_ADDED]
    assert controller.editor.is_open is False
    assert controller.editor.draft == ProductDraft()


@pytest.mark.asyncio
async def test_update_replaces_entry_in_place(controller, client, notifier):
    await controller.load()
    controller.open_edit("2")
    controller.editor.set_field("stockQuantity", "0")

    assert await controller.submit() is True

    assert ids(controller.collection) == ["1", "2", "3"]
    updated = [p for p in controller.collection if p.id == "2"]
    assert len(updated) == 1
    assert updated[0] == await client.get_product("2")
    assert updated[0].stock_quantity == 0
    assert notifier.alerts == [PRODUCT_UPDATED]
    assert mutating_calls(client)[0]["product_id"] == "2"


@pytest.mark.asyncio
async def test_file_mode_submit_uploads_files_and_releases_previews(controller, client):
    await controller.load()
    fill_new_product(controller)
    controller.editor.set_image_upload_type("file")
    assert controller.select_files([make_image("a.png"), make_image("b.png")]) is True
    previews = controller.editor.previews

    assert await controller.submit() is True

    payload = mutating_calls(client)[0]["payload"]
    assert [image.filename for _, image in payload.files] == ["a.png", "b.png"]
    assert controller.collection.to_list()[-1].images == ["uploads/products/a.png", "uploads/products/b.png"]
    assert previews.active == 0


@pytest.mark.asyncio
async def test_validation_failure_sends_nothing_and_keeps_draft(controller, client, notifier):
    await controller.load()
    fill_new_product(controller, name="")
    before = controller.editor.draft.as_dict()

    assert await controller.submit() is False

    assert mutating_calls(client) == []
    assert notifier.alerts == [REQUIRED_FIELDS_MESSAGE]
    assert controller.editor.draft.as_dict() == before
    assert controller.editor.is_open


@pytest.mark.asyncio
async def test_file_mode_without_files_is_rejected_before_network(controller, client, notifier):
    await controller.load()
    fill_new_product(controller)
    controller.editor.set_image_upload_type("file")

    assert await controller.submit() is False
    assert mutating_calls(client) == []
    assert notifier.alerts == [MISSING_IMAGE_FILE_MESSAGE]


@pytest.mark.asyncio
async def test_server_error_is_shown_verbatim_and_draft_survives(controller, client, notifier):
    await controller.load()
    fill_new_product(controller)
    client.fail_next("Error creating product", status_code=400)

    assert await controller.submit() is False

    assert notifier.alerts == ["Error creating product"]
    assert len(controller.collection) == 3
    assert controller.editor.is_open
    assert controller.editor.draft.name == "Joint Support"

    # retry without re-entering anything
    assert await controller.submit() is True
    assert len(controller.collection) == 4


@pytest.mark.asyncio
async def test_network_error_on_submit_uses_fixed_message(controller, client, notifier):
    await controller.load()
    fill_new_product(controller)
    client.fail_next("connection refused", status_code=None)

    assert await controller.submit() is False
    assert notifier.alerts == [NETWORK_ERROR_MESSAGE]


def test_too_many_files_warns_and_keeps_selection(controller, notifier):
    controller.open_create()
    controller.editor.set_image_upload_type("file")
    controller.select_files([make_image("keep.png")])

    assert controller.select_files([make_image(f"{i}.png") for i in range(6)]) is False

    assert notifier.alerts == ["Maximum 5 images allowed"]
    assert [f.filename for f in controller.editor.image_files] == ["keep.png"]
    assert len(controller.editor.preview_refs) == 1


def test_cancel_releases_previews(controller):
    controller.open_create()
    controller.editor.set_image_upload_type("file")
    controller.select_files([make_image("a.png"), make_image("b.png")])

    controller.cancel()

    assert controller.editor.previews.active == 0
    assert not controller.editor.is_open


@pytest.mark.asyncio
async def test_delete_requires_confirmation(client, settings):
    notifier = FakeNotifier(confirm_answer=False)
    controller = ProductAdminController(client, notifier, settings)
    await controller.load()

    assert await controller.delete("1") is False

    assert notifier.confirmations == [DELETE_CONFIRMATION]
    assert mutating_calls(client) == []
    assert len(controller.collection) == 3


@pytest.mark.asyncio
async def test_delete_removes_entry_after_confirmation(controller, client, notifier):
    await controller.load()

    assert await controller.delete("2") is True

    assert ids(controller.collection) == ["1", "3"]
    assert notifier.alerts == [PRODUCT_DELETED]


@pytest.mark.asyncio
async def test_delete_failure_leaves_collection_unchanged(controller, client, notifier):
    await controller.load()

    assert await controller.delete("missing") is False

    assert notifier.alerts == ["Product not found"]
    assert ids(controller.collection) == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_refresh_and_categories(controller, client):
    await controller.load()
    client._records[0]["stockQuantity"] = 50

    refreshed = await controller.refresh_product("1")

    assert refreshed.stock_quantity == 50
    assert controller.collection.get("1").stock_quantity == 50
    assert await controller.load_categories() == ["Medicine", "Food"]

    client.fail_next()
    assert await controller.load_categories() == list(PRODUCT_CATEGORIES)


@pytest.mark.asyncio
async def test_legacy_warnings_setting_reaches_payload(client, notifier, settings):
    settings.legacy_warnings_field = True
    controller = ProductAdminController(client, notifier, settings)
    await controller.load()
    fill_new_product(controller, sideEffects="Itching", warnings="External use")

    await controller.submit()

    payload = mutating_calls(client)[0]["payload"]
    assert payload.values("prescriptionDetails[warnings]") == ["External use"]
    assert payload.get("prescriptionDetails[sideEffects]") is None
    assert json.loads(payload.get("petType")) == ["Dog"]


def test_thumbnail_url_uses_products_route(controller):
    remote = make_product("1", images=["https://cdn.test/x.jpg"])
    uploaded = make_product("2", images=["uploads/products/y.jpg"])
    missing = make_product("3", images=[])

    assert controller.thumbnail_url(remote) == "https://cdn.test/x.jpg"
    assert controller.thumbnail_url(uploaded) == "http://api.test/api/products/uploads/products/y.jpg"
    assert controller.thumbnail_url(missing) == controller.settings.placeholder_image_url


@pytest.mark.asyncio
async def test_open_edit_unknown_id_raises(controller):
    await controller.load()
    with pytest.raises(KeyError):
        controller.open_edit("nope")


@pytest.mark.asyncio
async def test_empty_backend_loads_empty_collection(notifier, settings):
    controller = ProductAdminController(LocalProductCatalogueClient(), notifier, settings)
    await controller.load()
    assert controller.collection.to_list() == []


@pytest.mark.asyncio
async def test_load_unexpected_client_error_empties_collection(controller, client, notifier):
    await controller.load()

    async def broken():
        raise RuntimeError("socket closed")

    client.list_products = broken

    await controller.load()

    assert len(controller.collection) == 0
    assert controller.loading is False
    assert notifier.alerts == []
