from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QDialog, QWidget

from ..base_module import BaseModule
from .form import LeadForm
from .model import LeadsTableModel
from .view import LeadsView
from ...database.gateway import PersistenceGateway
from ...errors import DomainError, NotFoundError, ValidationError
from ...records import LEAD_STATUS_CONTACTED, LEAD_STATUS_LOST, Lead
from ...services.leads import build_lead, conversion_prefill, ensure_lead_status
from ...utils import ui_helpers as ui

_log = logging.getLogger(__name__)


class LeadsController(BaseModule):
    """
    Pending leads. "Sell" emits sale_requested(prefill, lead_id); the main
    window hands it to the sales module, which removes the lead once the
    sale is saved.
    """
    sale_requested = Signal(object, str)

    def __init__(self, gateway: PersistenceGateway):
        super().__init__()
        self.gateway = gateway
        self.view = LeadsView()
        self.model = LeadsTableModel()
        self.view.table.setModel(self.model)

        self.view.btn_new.clicked.connect(self._on_new)
        self.view.btn_contacted.clicked.connect(lambda: self._set_status(LEAD_STATUS_CONTACTED))
        self.view.btn_lost.clicked.connect(lambda: self._set_status(LEAD_STATUS_LOST))
        self.view.btn_sell.clicked.connect(self._on_sell)
        self.view.btn_delete.clicked.connect(self._on_delete)
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        try:
            leads = self.gateway.list_leads()
        except DomainError as e:
            self._handle_error("Failed to load leads", e)
            return
        self.model.replace(leads)

    def _selected(self) -> Optional[Lead]:
        row = self.view.table.selected_row()
        return self.model.at(row) if row >= 0 else None

    def _handle_error(self, context: str, err: Exception) -> None:
        if isinstance(err, ValidationError):
            title, msg = "Invalid data", str(err)
        elif isinstance(err, NotFoundError):
            title, msg = "Not found", str(err)
        else:
            title, msg = "Storage error", f"{context}.\n\n{err}"
        _log.warning("%s: %s", context, err)
        ui.error(self.view, title, msg)

    # ------------------------------------------------------------------ #
    def _on_new(self) -> None:
        try:
            inventory = self.gateway.list_inventory()
        except DomainError as e:
            # the product list is only a convenience here
            _log.warning("Could not load inventory for the lead form: %s", e)
            inventory = []
        form = LeadForm(self.view, inventory=inventory)
        if form.exec() != QDialog.Accepted:
            return
        p = form.payload()
        if not p:
            return
        try:
            lead = build_lead(**p)
            self.gateway.create_lead(lead)
        except DomainError as e:
            self._handle_error("Failed to save lead", e)
            return
        _log.info("Created lead %s for %s", lead.id, lead.client_name)
        self.data_changed.emit()

    def _set_status(self, status: str) -> None:
        lead = self._selected()
        if lead is None:
            ui.info(self.view, "Select", "Please select a lead.")
            return
        try:
            self.gateway.update_lead_status(lead.id, ensure_lead_status(status))
        except DomainError as e:
            self._handle_error("Failed to update lead", e)
            self.reload()
            return
        self.data_changed.emit()

    def _on_sell(self) -> None:
        lead = self._selected()
        if lead is None:
            ui.info(self.view, "Select", "Please select a lead to convert.")
            return
        try:
            inventory = self.gateway.list_inventory()
        except DomainError as e:
            self._handle_error("Failed to load inventory", e)
            return
        self.sale_requested.emit(conversion_prefill(lead, inventory), lead.id)

    def _on_delete(self) -> None:
        lead = self._selected()
        if lead is None:
            ui.info(self.view, "Select", "Please select a lead to delete.")
            return
        if not ui.confirm(self.view, "Delete", f"Delete the lead for {lead.client_name}?"):
            return
        try:
            self.gateway.delete_lead(lead.id)
        except DomainError as e:
            self._handle_error("Failed to delete lead", e)
            self.reload()
            return
        self.data_changed.emit()
