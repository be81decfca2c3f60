import pytest
from taskboard.domain.errors import TaskValidationError
from taskboard.domain.paging import Page, PageRequest, resolve_sort_field


@pytest.mark.parametrize(
    "sort, expected",
    [
        (None, "created_at"),
        ("createdAt", "created_at"),
        ("created_at", "created_at"),
        ("title", "title"),
        ("modifiedBy", "modified_by"),
        ("updatedAt", "updated_at"),
    ],
)
def test_resolve_sort_field(sort, expected):
    assert resolve_sort_field(sort) == expected


def test_resolve_sort_field_rejects_unknown():
    with pytest.raises(TaskValidationError) as exc:
        resolve_sort_field("task_id; drop table tasks")
    assert exc.value.field == "sort"


def test_page_request_rejects_negative_page_and_empty_size():
    with pytest.raises(TaskValidationError):
        PageRequest(page=-1)
    with pytest.raises(TaskValidationError):
        PageRequest(size=0)


def test_page_metadata():
    page = Page(content=["a", "b"], total_elements=12, request=PageRequest(page=1, size=5))

    assert page.total_pages == 3
    assert page.number == 1
    assert page.number_of_elements == 2
    assert not page.is_first
    assert not page.is_last


def test_empty_page_metadata():
    page = Page(content=[], total_elements=0)

    assert page.total_pages == 0
    assert page.is_first
    assert page.is_last


def test_page_map_keeps_metadata():
    page = Page(content=[1, 2], total_elements=7, request=PageRequest(page=0, size=2))

    mapped = page.map(str)

    assert mapped.content == ["1", "2"]
    assert mapped.total_elements == 7
    assert mapped.request == page.request
