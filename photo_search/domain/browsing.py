"""Browsing state for a photo grid as pure transitions.

Each transition takes the current :class:`BrowserState` and returns the next
state together with :class:`RenderInstructions` describing what the view has
to redraw. Nothing here touches a view.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from photo_search.domain.models import ImageBuffer, IndexPath, Photo


@dataclass(frozen=True, slots=True)
class BrowserState:
    expanded: IndexPath | None = None
    sharing: bool = False
    selected: tuple[Photo, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderInstructions:
    reload: tuple[IndexPath, ...] = ()
    scroll_to: IndexPath | None = None
    allows_multiple_selection: bool | None = None
    clear_selection: bool = False
    selected_count: int | None = None
    fetch_large_image: IndexPath | None = None
    share_items: tuple[ImageBuffer, ...] = ()


@dataclass(frozen=True, slots=True)
class Transition:
    state: BrowserState
    render: RenderInstructions


def _unchanged(state: BrowserState) -> Transition:
    return Transition(state, RenderInstructions())


def toggle_expanded(state: BrowserState, path: IndexPath, photo: Photo) -> Transition:
    """Tap on a photo outside sharing mode: expand it, or collapse it if already expanded."""

    if state.sharing:
        return _unchanged(state)

    previous = state.expanded
    expanded = None if previous == path else path
    reload = tuple(p for p in (expanded, previous) if p is not None)
    fetch = expanded if expanded is not None and photo.large_image is None else None
    return Transition(
        replace(state, expanded=expanded),
        RenderInstructions(reload=reload, scroll_to=expanded, fetch_large_image=fetch),
    )


def set_sharing(state: BrowserState, sharing: bool) -> Transition:
    """Enter or leave multi-select mode; the selection always starts empty."""

    reload: tuple[IndexPath, ...] = ()
    expanded = state.expanded
    if sharing and expanded is not None:
        reload = (expanded,)
        expanded = None
    return Transition(
        BrowserState(expanded=expanded, sharing=sharing, selected=()),
        RenderInstructions(
            reload=reload,
            allows_multiple_selection=sharing,
            clear_selection=True,
            selected_count=0 if sharing else None,
        ),
    )


def select_photo(state: BrowserState, photo: Photo) -> Transition:
    if not state.sharing or any(p is photo for p in state.selected):
        return _unchanged(state)
    selected = state.selected + (photo,)
    return Transition(
        replace(state, selected=selected),
        RenderInstructions(selected_count=len(selected)),
    )


def deselect_photo(state: BrowserState, photo: Photo) -> Transition:
    if not state.sharing or not any(p is photo for p in state.selected):
        return _unchanged(state)
    selected = tuple(p for p in state.selected if p is not photo)
    return Transition(
        replace(state, selected=selected),
        RenderInstructions(selected_count=len(selected)),
    )


def share_pressed(state: BrowserState, *, has_results: bool) -> Transition:
    """Share button: toggles sharing mode until photos are picked, then shares them."""

    if not has_results:
        return _unchanged(state)
    if not state.selected:
        return set_sharing(state, not state.sharing)
    if not state.sharing:
        return _unchanged(state)

    items = tuple(p.thumbnail for p in state.selected if p.thumbnail is not None)
    if not items:
        return _unchanged(state)
    return Transition(state, RenderInstructions(share_items=items))


def share_finished(state: BrowserState) -> Transition:
    return set_sharing(state, False)


__all__ = [
    "BrowserState",
    "RenderInstructions",
    "Transition",
    "toggle_expanded",
    "set_sharing",
    "select_photo",
    "deselect_photo",
    "share_pressed",
    "share_finished",
]
