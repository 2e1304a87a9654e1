from akkuea_api.schemas.resource import ResourceFields, ResourcePatch, UpdateResourceRequest, apply_patch

CURRENT = ResourceFields(title='Intro', content='Body', language='en', format='article')


def test_apply_patch_replaces_only_provided_fields() -> None:
    updated = apply_patch(CURRENT, ResourcePatch(title='Advanced', format='video'))

    assert updated == ResourceFields(title='Advanced', content='Body', language='en', format='video')


def test_apply_patch_leaves_input_untouched() -> None:
    apply_patch(CURRENT, ResourcePatch(content='Changed'))

    assert CURRENT.content == 'Body'


def test_empty_patch_is_identity() -> None:
    patch = ResourcePatch()

    assert patch.is_empty()
    assert apply_patch(CURRENT, patch) == CURRENT


def test_empty_string_counts_as_provided() -> None:
    patch = ResourcePatch(content='')

    assert not patch.is_empty()
    assert apply_patch(CURRENT, patch).content == ''


def test_update_request_maps_nulls_to_absent_slots() -> None:
    patch = UpdateResourceRequest.model_validate({'title': None, 'language': 'es'}).to_patch()

    assert patch.provided() == {'language': 'es'}
