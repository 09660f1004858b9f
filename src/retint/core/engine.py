"""Dynamic theme engine.

Applies a theme to a live document: injects the base stylesheet, writes
an override stylesheet after every page stylesheet, rewrites inline
colors, and keeps all of it current as the page mutates.
"""

import logging
from dataclasses import dataclass, field

from retint.css import process_stylesheet
from retint.dom import (
    Document,
    Element,
    LinkElement,
    MutationObserver,
    MutationRecord,
    Node,
    StyleElement,
    SvgElement,
    css_property_name,
)
from retint.exceptions import PageErrorGuard
from retint.models import ColorRole, EngineConfig, ThemeProfile
from retint.protocols import EngineObserver
from retint.transform import TransformContext, detect_theme_mode, get_default_context, transform_css_color

from .base_styles import (
    BASE_STYLE_CLASS,
    INLINE_ATTRIBUTE_PREFIX,
    OVERRIDE_STYLE_CLASS,
    build_base_css,
)
from .loop_guard import LoopGuard
from .scheduler import (
    AwaitLoad,
    Effect,
    ForgetNode,
    QueueState,
    ScheduleFlush,
    SheetSource,
    begin_flush,
    reduce_mutation,
    take_inline,
)
from .state_machine import EngineState, EngineStateMachine
from .svg import SvgClassifier

logger = logging.getLogger(__name__)

INLINE_COLOR_PROPERTIES = (
    "color",
    "backgroundColor",
    "borderColor",
    "borderTopColor",
    "borderRightColor",
    "borderBottomColor",
    "borderLeftColor",
)

ENGINE_CLASSES = frozenset({BASE_STYLE_CLASS, OVERRIDE_STYLE_CLASS})


def inline_role(prop: str) -> ColorRole:
    """Role of an inline color property."""
    lowered = prop.lower()
    if "background" in lowered:
        return ColorRole.BACKGROUND
    if "border" in lowered:
        return ColorRole.BORDER
    return ColorRole.TEXT


def is_engine_node(node: Node) -> bool:
    """Whether node is a stylesheet the engine injected."""
    return isinstance(node, Element) and not ENGINE_CLASSES.isdisjoint(node.class_list)


@dataclass
class _InlineRecord:
    """Inline colors the engine rewrote on one element."""

    element: Element
    # css property -> (original value, original priority, written value)
    originals: dict[str, tuple[str, str, str]] = field(default_factory=dict)


class DynamicThemeEngine:
    """
    Re-themes one document.

    Lifecycle (see EngineStateMachine):
        uninitialized -> active(theme) <-> cleared -> ... -> destroyed

    The engine owns two mutation observers. The head observer is attached
    on the first update_theme() and stays attached until destroy(); it
    picks up stylesheets added to ``<head>``. The inline observer watches
    the whole document for added elements and ``style`` attribute changes
    and is only attached while inline observation is enabled.

    Example:
        ```python
        engine = DynamicThemeEngine(document)
        engine.update_theme(catalog.get("dark"), enable_inline_observation=True)
        document.deliver_mutations()
        document.run_animation_frames()
        ```
    """

    def __init__(
        self,
        document: Document,
        context: TransformContext | None = None,
        config: EngineConfig | None = None,
    ):
        """
        Initialize the engine.

        Args:
            document: Document to theme
            context: Transform caches; engines built without one share the
                process-wide default context
            config: Engine tunables (defaults to the context's config)
        """
        self.document = document
        self.context = context or get_default_context()
        self.config = config or self.context.config

        self._state = EngineStateMachine()
        self._theme: ThemeProfile | None = None

        self._head_observer: MutationObserver | None = None
        self._inline_observer: MutationObserver | None = None
        self._queue = QueueState()
        self._flush_handles: set[int] = set()
        self._chunk_handle: int | None = None

        self._base_style: StyleElement | None = None
        # Source node id -> injected override element
        self._overrides: dict[int, StyleElement] = {}
        self._managed: set[int] = set()
        self._awaiting_load: set[int] = set()

        # Node id -> style attribute text the engine last wrote
        self._transformed: dict[int, str] = {}
        self._inline_records: dict[int, _InlineRecord] = {}

        self.loop_guard = LoopGuard(
            clock=document.clock,
            window_ms=self.config.loop_window_ms,
            max_cycles=self.config.max_loop_cycles,
            warning_interval_ms=self.config.loop_warning_interval_ms,
            on_loop=self._state.loop_detected,
        )
        self.svg = SvgClassifier(small_px=self.config.small_svg_px)

    # Observers and state

    def register_observer(self, observer: EngineObserver) -> None:
        """Register an observer to receive EngineEvents."""
        self._state.register_observer(observer)

    def unregister_observer(self, observer: EngineObserver) -> None:
        self._state.unregister_observer(observer)

    @property
    def state(self) -> EngineState:
        return self._state.state

    @property
    def theme(self) -> ThemeProfile | None:
        return self._theme

    @property
    def is_destroyed(self) -> bool:
        return self._state.is_destroyed

    @property
    def inline_observation_enabled(self) -> bool:
        return self._inline_observer is not None

    @property
    def head_observer_attached(self) -> bool:
        return self._head_observer is not None

    @property
    def base_style(self) -> StyleElement | None:
        return self._base_style

    @property
    def override_styles(self) -> list[StyleElement]:
        return list(self._overrides.values())

    def stats(self) -> dict[str, int]:
        return {
            "managed_sheets": len(self._managed),
            "override_styles": len(self._overrides),
            "transformed_elements": len(self._transformed),
            "pending_sheets": len(self._queue.sheets),
            "pending_inline": len(self._queue.inline),
            "loop_guard_entries": len(self.loop_guard),
            "svg_entries": len(self.svg),
        }

    # Lifecycle

    def update_theme(self, profile: ThemeProfile, enable_inline_observation: bool = False) -> None:
        """
        Apply a theme, replacing whatever the engine applied before.

        Args:
            profile: Resolved theme profile
            enable_inline_observation: Keep rewriting inline styles as the
                page changes (advanced dynamic mode)
        """
        if self.is_destroyed:
            logger.debug("update_theme() ignored: engine destroyed")
            return

        previous = self._theme
        self._theme = profile
        self.context.flush()

        self._ensure_head_observer()
        self._set_inline_observation(enable_inline_observation)

        if previous is not None:
            self.context.registry.clear_theme(previous.id)

        self._remove_injected_styles()
        self._managed.clear()
        self._transformed.clear()

        self._inject_base_styles()
        self._process_existing_stylesheets()
        self._reprocess_all_inline_styles()

        logger.info(
            f"Applied theme {profile.id} "
            f"({len(self._overrides)} override sheets, {len(self._transformed)} inline elements)"
        )
        self._state.theme_applied(profile.id)

    def clear(self) -> None:
        """
        Remove everything the engine applied, keeping the head observer.

        Inline observation is disabled until the next update_theme() asks
        for it. Inline colors the engine rewrote are restored.
        """
        if self.is_destroyed:
            return

        self._set_inline_observation(False)
        self._cancel_frames()
        self._queue = QueueState()

        self._restore_inline_styles()
        self._remove_injected_styles()

        if self._theme is not None:
            self.context.registry.clear_theme(self._theme.id)
            logger.info(f"Cleared theme {self._theme.id}")

        self._managed.clear()
        self._transformed.clear()
        self._inline_records.clear()
        self.loop_guard.clear()
        self.svg.clear()
        self._theme = None
        self._state.cleared()

    def destroy(self) -> None:
        """Clear, disconnect every observer and release the shared caches. Idempotent."""
        if self.is_destroyed:
            return

        self.clear()
        if self._head_observer is not None:
            self._head_observer.disconnect()
            self._head_observer = None

        self.context.registry.clear()
        self.context.palette.dispose()
        self._awaiting_load.clear()
        logger.info("Theme engine destroyed")
        self._state.destroyed()

    # Observation

    def _ensure_head_observer(self) -> None:
        if self._head_observer is not None:
            return
        self._head_observer = MutationObserver(self._on_mutations)
        self._head_observer.observe(self.document.head, child_list=True, subtree=False)
        logger.debug("Head observer attached")

    def _set_inline_observation(self, enabled: bool) -> None:
        if not enabled:
            if self._inline_observer is not None:
                self._inline_observer.disconnect()
                self._inline_observer = None
                logger.debug("Inline observer detached")
            return

        if self._inline_observer is not None:
            return
        self._inline_observer = MutationObserver(self._on_mutations)
        self._inline_observer.observe(
            self.document.document_element,
            child_list=True,
            attributes=True,
            attribute_filter=["style"],
            subtree=True,
        )
        logger.debug("Inline observer attached")

    def _on_mutations(self, records: list[MutationRecord], observer: MutationObserver) -> None:
        if self.is_destroyed or self._theme is None:
            return
        for record in records:
            self._queue, effects = reduce_mutation(self._queue, record, is_engine_node)
            self._apply_effects(effects)

    def _apply_effects(self, effects: list[Effect]) -> None:
        for effect in effects:
            match effect:
                case ScheduleFlush():
                    handle = self.document.request_animation_frame(self._flush)
                    self._flush_handles.add(handle)
                case AwaitLoad(link=link):
                    self._await_load(link)
                case ForgetNode(node_id=node_id):
                    self._forget(node_id)

    def _flush(self, timestamp: float) -> None:
        self._flush_handles.clear()
        sheets, self._queue = begin_flush(self._queue)
        if self.is_destroyed or self._theme is None:
            return

        for source in sheets:
            self._process_sheet(source)

        if self._queue.inline:
            self._schedule_chunk()

    def _schedule_chunk(self) -> None:
        if self._chunk_handle is None:
            self._chunk_handle = self.document.request_animation_frame(self._process_chunk)

    def _process_chunk(self, timestamp: float) -> None:
        self._chunk_handle = None
        if self.is_destroyed or self._theme is None:
            return

        batch, self._queue = take_inline(self._queue, self.config.inline_chunk_size)
        for element in batch:
            if element.is_connected and not self._is_current(element):
                self._process_inline_style(element)

        if self._queue.inline:
            self._schedule_chunk()

    def _cancel_frames(self) -> None:
        for handle in self._flush_handles:
            self.document.cancel_animation_frame(handle)
        self._flush_handles.clear()
        if self._chunk_handle is not None:
            self.document.cancel_animation_frame(self._chunk_handle)
            self._chunk_handle = None

    def _forget(self, node_id: int) -> None:
        self.loop_guard.forget(node_id)
        self.svg.forget(node_id)
        self._transformed.pop(node_id, None)
        self._inline_records.pop(node_id, None)
        self._managed.discard(node_id)

        override = self._overrides.pop(node_id, None)
        if override is not None:
            override.remove()

    # Stylesheets

    def _remove_injected_styles(self) -> None:
        for override in self._overrides.values():
            override.remove()
        self._overrides.clear()

        if self._base_style is not None:
            self._base_style.remove()
            self._base_style = None

    def _inject_base_styles(self) -> None:
        if self._theme is None:
            return
        css = build_base_css(self._theme, self.context)
        self._base_style = StyleElement(css, {"class": BASE_STYLE_CLASS})
        root = self.document.document_element
        first = root.children[0] if root.children else None
        root.insert_before(self._base_style, first)

    def _process_existing_stylesheets(self) -> None:
        for source in self.document.style_sources():
            if source.node_id in self._managed or is_engine_node(source):
                continue
            if isinstance(source, LinkElement) and source.sheet is None:
                self._await_load(source)
            else:
                self._process_sheet(source)

    def _await_load(self, link: LinkElement) -> None:
        if link.node_id in self._awaiting_load:
            return
        self._awaiting_load.add(link.node_id)
        link.add_load_listener(self._on_link_loaded)
        logger.debug(f"Waiting for stylesheet {link.href} to load")

    def _on_link_loaded(self, link: LinkElement) -> None:
        self._awaiting_load.discard(link.node_id)
        self._process_sheet(link)

    def _process_sheet(self, source: SheetSource) -> None:
        if self._theme is None or self.is_destroyed or source.node_id in self._managed:
            return
        if not source.is_connected:
            return

        self._managed.add(source.node_id)
        sheet = source.sheet
        if sheet is None:
            return

        css = ""
        with PageErrorGuard(f"stylesheet {source!r}"):
            css = process_stylesheet(sheet, self._theme, self.context, self.config)
        rule_count = css.count("\n") + 1 if css else 0

        if css and source.parent is not None:
            override = StyleElement(css, {"class": OVERRIDE_STYLE_CLASS})
            source.parent.insert_after(override, source)
            self._overrides[source.node_id] = override
            logger.debug(f"Override for {source!r}: {rule_count} rules")

        self._state.sheet_processed(source.node_id, rule_count)

    # Inline styles

    def _is_current(self, element: Element) -> bool:
        """Whether the element's style is still exactly what the engine wrote."""
        written = self._transformed.get(element.node_id)
        return written is not None and written == element.get_attribute("style")

    def _reprocess_all_inline_styles(self) -> None:
        for element in self.document.query_styled():
            self._process_inline_style(element)

    def _process_inline_style(self, element: Element) -> None:
        theme = self._theme
        if theme is None:
            return

        if self.loop_guard.should_skip(element.node_id):
            return

        if isinstance(element, SvgElement) and self._handle_svg(element, theme):
            return

        record = self._inline_records.setdefault(element.node_id, _InlineRecord(element))
        originals = record.originals
        changed = False

        for prop in INLINE_COLOR_PROPERTIES:
            name = css_property_name(prop)
            value = element.style.get_property_value(name)
            if not value:
                continue

            source_value, source_priority, written = originals.get(
                name, (value, element.style.get_property_priority(name), "")
            )
            if value != written:
                source_value = value
                source_priority = element.style.get_property_priority(name)

            transformed = None
            with PageErrorGuard(f"inline {name} on {element!r}"):
                transformed = transform_css_color(
                    source_value, inline_role(prop), theme, context=self.context
                )
            if transformed and transformed != value:
                element.style.set_property(name, transformed, "important")
                element.set_attribute(f"{INLINE_ATTRIBUTE_PREFIX}{name}", "true")
                originals[name] = (source_value, source_priority, transformed)
                changed = True

        if not originals:
            del self._inline_records[element.node_id]
        if changed or element.node_id in self._transformed:
            self._transformed[element.node_id] = element.get_attribute("style") or ""

    def _handle_svg(self, element: SvgElement, theme: ThemeProfile) -> bool:
        """Logo handling; True when the element must not be recolored."""
        root = self.svg.root_of(element)
        if root is None or not self.svg.is_image_like(root):
            return False

        if self.svg.claim(root) and detect_theme_mode(theme).is_dark and self.svg.is_small(root):
            root.set_attribute(f"{INLINE_ATTRIBUTE_PREFIX}invert", "")
            logger.debug(f"Marked logo {root!r} for inversion")
        return True

    def _restore_inline_styles(self) -> None:
        for record in self._inline_records.values():
            element = record.element
            if not element.is_connected:
                continue
            for name, (value, priority, written) in record.originals.items():
                if element.style.get_property_value(name) == written:
                    element.style.set_property(name, value, priority)
                element.remove_attribute(f"{INLINE_ATTRIBUTE_PREFIX}{name}")
