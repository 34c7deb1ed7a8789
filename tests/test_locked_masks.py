"""
Tests for lock semantics: a locked mask rejects every mutation except
toggling the lock itself, and rejection leaves it byte-for-byte unchanged.
"""
import pytest

from models.transform import Vec2


@pytest.fixture
def locked(store, square_mask):
    store.toggle_lock(square_mask.id)
    return square_mask


MUTATIONS = [
    ('set_position', (4, 4)),
    ('set_rotation', (45,)),
    ('flatten_mask', ()),
    ('update_point', (0, Vec2(1, 1))),
    ('add_point', (0, Vec2(1, 1))),
    ('remove_point', (0,)),
    ('toggle_point_curve', (0,)),
    ('update_bezier_handle', (0, 'h1', Vec2(1, 1))),
    ('assign_material', ('oak',)),
    ('set_material_settings', ({'scale': 2},)),
    ('rename_mask', ('Renamed',)),
    ('toggle_visibility', ()),
    ('set_mask_color', ('#000000',)),
    ('set_mask_notes', ('note',)),
    ('reorder_mask', (42,)),
    ('delete_mask', ()),
]


class TestLockedMask:

    @pytest.mark.parametrize('method, args', MUTATIONS)
    def test_store_mutation_rejected(self, store, locked, method, args):
        before = store.get_mask(locked.id).to_dict()
        assert getattr(store, method)(locked.id, *args) is False
        assert store.has_mask(locked.id)
        assert store.get_mask(locked.id).to_dict() == before

    def test_move_to_group_rejected(self, store, locked):
        group_id = store.create_group('Front')
        assert store.move_mask_to_group(locked.id, group_id) is False
        assert store.get_mask(locked.id).group_id is None

    def test_locked_material_emits_nothing(self, store, locked, events):
        store.assign_material(locked.id, 'oak')
        assert events == []

    def test_unlock_is_allowed(self, store, locked):
        assert store.toggle_lock(locked.id)
        assert not store.get_mask(locked.id).is_locked
        assert store.set_position(locked.id, 4, 4)

    def test_interaction_modes_refuse_locked(self, controller, store, locked):
        before = store.get_mask(locked.id).to_dict()
        assert controller.enter_point_editing(locked.id) is False
        assert controller.enter_move_mode(locked.id) is False
        assert controller.enter_rotate_mode(locked.id) is False
        assert store.get_mask(locked.id).to_dict() == before

    def test_lock_mid_drag_freezes_mask(self, controller, store, square_mask):
        controller.enter_move_mode(square_mask.id)
        controller.start_move_drag(square_mask.id, (0, 0))
        controller.update_move_drag(square_mask.id, Vec2(3, 3))
        store.toggle_lock(square_mask.id)
        assert controller.update_move_drag(square_mask.id, Vec2(8, 8)) is False
        assert store.get_mask(square_mask.id).position == Vec2(3, 3)
