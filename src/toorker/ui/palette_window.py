from __future__ import annotations

import asyncio
from typing import Any, Callable

from PySide6.QtCore import QEvent, QObject, Qt
from PySide6.QtGui import QFont, QKeyEvent
from PySide6.QtWidgets import (
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from toorker.palette import Action, PaletteController, PaletteState
from toorker.utils import BackgroundTask, ErrorDescriptor, get_logger, run_background

from .icons import glyph_for


logger = get_logger(__name__)

SEARCH_PLACEHOLDER = "Search, = 2+3, uuid, qr url, ip, open desktop, lorem..."
EMPTY_STATE_TEXT = "No results found"
ACTION_INDEX_ROLE = Qt.ItemDataRole.UserRole


def action_affordance(action: Action) -> str:
    if action.shortcut:
        return action.shortcut
    if action.is_smart:
        return "↵ copy" if action.result else "↵ run"
    return ""


class PaletteWindow(QWidget):
    """Frameless always-on-top launcher window rendering a PaletteController."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(
            parent,
            Qt.WindowType.Tool
            | Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint,
        )
        self.setObjectName("PaletteWindow")
        self._controller: PaletteController | None = None
        self._unsubscribers: list[Callable[[], None]] = []
        self._pending: set[asyncio.Future[Any]] = set()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.search_input = QLineEdit()
        self.search_input.setObjectName("PaletteSearch")
        self.search_input.setPlaceholderText(SEARCH_PLACEHOLDER)
        self.search_input.textChanged.connect(self._handle_text_changed)
        self.search_input.installEventFilter(self)
        layout.addWidget(self.search_input)

        self.list_widget = QListWidget()
        self.list_widget.setObjectName("PaletteResults")
        self.list_widget.setMouseTracking(True)
        self.list_widget.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.list_widget.itemEntered.connect(self._handle_item_hovered)
        self.list_widget.itemClicked.connect(self._handle_item_clicked)
        layout.addWidget(self.list_widget, stretch=1)

        self.status_label = QLabel()
        self.status_label.setObjectName("PaletteStatus")
        self.status_label.setVisible(False)
        layout.addWidget(self.status_label)

        self.resize(640, 420)

    # ----------------------------------------------------------------- Binding

    @property
    def controller(self) -> PaletteController | None:
        return self._controller

    def bind(self, controller: PaletteController) -> None:
        self.unbind()
        self._controller = controller
        self._unsubscribers = [
            controller.changed.subscribe(lambda _payload: self.render()),
            controller.execution_failed.subscribe(self._handle_execution_failed),
        ]
        self.render()

    def unbind(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._controller = None

    # ------------------------------------------------------------- Host API

    def focus_input(self) -> None:
        self.search_input.setFocus(Qt.FocusReason.ActiveWindowFocusReason)

    def summon(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    # --------------------------------------------------------------- Render

    def render(self) -> None:
        controller = self._controller
        if controller is None:
            return

        if self.search_input.text() != controller.query:
            self.search_input.blockSignals(True)
            self.search_input.setText(controller.query)
            self.search_input.blockSignals(False)
        self.search_input.setReadOnly(controller.state is PaletteState.FEEDBACK)

        self.list_widget.clear()
        sections = controller.sections
        if not sections:
            empty = QListWidgetItem(EMPTY_STATE_TEXT)
            empty.setFlags(Qt.ItemFlag.NoItemFlags)
            self.list_widget.addItem(empty)
            return

        feedback = controller.feedback
        header_font = QFont(self.list_widget.font())
        header_font.setBold(True)
        index = 0
        selected_row = -1
        for section in sections:
            header = QListWidgetItem(section.title.upper())
            header.setFlags(Qt.ItemFlag.NoItemFlags)
            header.setFont(header_font)
            self.list_widget.addItem(header)
            for action in section.actions:
                description = action.description
                if feedback is not None and feedback.action_id == action.id:
                    description = feedback.message
                text = f"{glyph_for(action.icon)}  {action.label}"
                if description:
                    text += f"  ·  {description}"
                affordance = action_affordance(action)
                if affordance:
                    text += f"    {affordance}"
                item = QListWidgetItem(text)
                item.setData(ACTION_INDEX_ROLE, index)
                item.setToolTip(action.description)
                self.list_widget.addItem(item)
                if index == controller.selected:
                    selected_row = self.list_widget.count() - 1
                index += 1

        if selected_row >= 0:
            self.list_widget.setCurrentRow(selected_row)
            self.list_widget.scrollToItem(self.list_widget.item(selected_row))

    # ------------------------------------------------------------------ Events

    def changeEvent(self, event: QEvent) -> None:  # type: ignore[override]
        super().changeEvent(event)
        if event.type() != QEvent.Type.ActivationChange or self._controller is None:
            return
        if self.isActiveWindow():
            self._track(self._controller.on_focus())
        else:
            self._controller.on_blur()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self.search_input and event.type() == QEvent.Type.KeyPress:
            if self._handle_key(event):  # type: ignore[arg-type]
                return True
        return super().eventFilter(watched, event)

    def _handle_key(self, event: QKeyEvent) -> bool:
        controller = self._controller
        if controller is None:
            return False
        key = event.key()
        if key == Qt.Key.Key_Escape:
            controller.on_escape()
            return True
        if key == Qt.Key.Key_Down:
            controller.move_selection(1)
            return True
        if key == Qt.Key.Key_Up:
            controller.move_selection(-1)
            return True
        if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self._track(run_background(controller.execute_selected()))
            return True
        return False

    def _handle_text_changed(self, text: str) -> None:
        self.status_label.setVisible(False)
        if self._controller is not None:
            self._controller.set_query(text)

    def _handle_item_hovered(self, item: QListWidgetItem) -> None:
        index = item.data(ACTION_INDEX_ROLE)
        if self._controller is not None and index is not None:
            self._controller.select(int(index))

    def _handle_item_clicked(self, item: QListWidgetItem) -> None:
        index = item.data(ACTION_INDEX_ROLE)
        if self._controller is not None and index is not None:
            self._track(run_background(self._controller.execute_at(int(index))))

    def _handle_execution_failed(self, descriptor: ErrorDescriptor) -> None:
        logger.debug("Showing execution failure", headline=descriptor.headline)
        self.status_label.setText(descriptor.headline)
        self.status_label.setToolTip(descriptor.suggestion or descriptor.detail)
        self.status_label.setVisible(True)

    def _track(self, task: BackgroundTask) -> None:
        self._pending.add(task.task)
        task.task.add_done_callback(self._pending.discard)


__all__ = ["PaletteWindow", "action_affordance"]
