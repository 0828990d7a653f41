from spreadview.document import PageMap


def test_identity_layout() -> None:
    page_map = PageMap(4)

    assert page_map.total_pages == 4
    assert [page_map.actual_page(i) for i in range(4)] == [0, 1, 2, 3]
    assert page_map.actual_page(4) is None
    assert page_map.actual_page(-1) is None


def test_insert_blank_shifts_following_pages() -> None:
    page_map = PageMap(4)

    assert page_map.insert_blank_at(2) is True

    assert page_map.slots == (0, 1, None, 2, 3)
    assert page_map.is_blank(2)
    assert page_map.actual_page(2) is None
    assert page_map.actual_page(3) == 2


def test_insert_blank_at_end_is_allowed() -> None:
    page_map = PageMap(3)

    assert page_map.insert_blank_before(3) is True

    assert page_map.slots == (0, 1, 2, None)


def test_out_of_range_insert_is_ignored() -> None:
    page_map = PageMap(3)

    assert page_map.insert_blank_at(4) is False
    assert page_map.insert_blank_at(-1) is False
    assert page_map.slots == (0, 1, 2)


def test_toggle_first_blank_is_an_involution() -> None:
    page_map = PageMap(3)

    page_map.toggle_first_blank()
    assert page_map.slots == (None, 0, 1, 2)

    page_map.toggle_first_blank()
    assert page_map.slots == (0, 1, 2)


def test_replay_blanks_reproduces_layout() -> None:
    original = PageMap(5)
    original.insert_blank_at(0)
    original.insert_blank_at(3)
    original.insert_blank_at(3)

    replayed = PageMap(5)
    replayed.insert_blank_at(1)
    replayed.replay_blanks(original.blank_indices())

    assert replayed.slots == original.slots
    assert replayed.blank_indices() == {0, 3, 4}


def test_real_pages_keep_order_and_stay_unique() -> None:
    page_map = PageMap(6)
    for index in (0, 2, 5, 9, 3):
        page_map.insert_blank_at(index)

    real = [slot for slot in page_map.slots if slot is not None]

    assert real == list(range(6))
