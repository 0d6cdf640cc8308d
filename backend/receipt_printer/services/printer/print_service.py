"""
Print Service - template cache + renderer + sink

Keeps the templates pushed by the POS, remembers the active one and sends
rendered receipts to the configured sink (EscposSink, or anything with a
send(commands) method).
"""

import logging
import threading
from typing import Dict, List, Optional, Union

from receipt_printer.models.commands import PrintCommand
from receipt_printer.models.receipt import ReceiptData
from receipt_printer.models.template import ReceiptTemplate
from receipt_printer.services.receipt.conditions import ConditionSyntaxError
from receipt_printer.services.receipt.receipt_renderer import TemplateRenderer
from receipt_printer.services.receipt.samples import sample_receipt_data
from receipt_printer.services.receipt.template_loader import (
    LoadError,
    Source,
    load_receipt_data,
    load_template,
)

logger = logging.getLogger(__name__)


class TemplateNotFoundError(LookupError):
    """Template id is not in the cache"""


class NoActiveTemplateError(LookupError):
    """Nothing to print with: no template given and none active"""


class PrintService:
    """
    Receipt printing service

    Main methods:
    - set_template() - cache a template and make it active
    - render() - build the command stream for a receipt
    - print_receipt() - render and send to the sink
    - test_print() - print the built-in test receipt
    """

    def __init__(self, sink=None, renderer: Optional[TemplateRenderer] = None):
        """
        Args:
            sink: Object with send(commands); None means no printer connected
            renderer: TemplateRenderer (default: settings based)
        """
        self.sink = sink
        self.renderer = renderer or TemplateRenderer()

        self._templates: Dict[str, ReceiptTemplate] = {}
        self._active_template_id: Optional[str] = None
        self._lock = threading.RLock()  # template cache
        self._print_lock = threading.Lock()  # sink writes

    # ========================================================================
    # TEMPLATE CACHE
    # ========================================================================

    @property
    def is_connected(self) -> bool:
        return self.sink is not None

    @property
    def active_template_id(self) -> Optional[str]:
        return self._active_template_id

    @property
    def active_template(self) -> Optional[ReceiptTemplate]:
        with self._lock:
            if self._active_template_id is None:
                return None
            return self._templates.get(self._active_template_id)

    def set_template(self, template: Union[ReceiptTemplate, Source]) -> ReceiptTemplate:
        """
        Cache a template and make it active

        Args:
            template: ReceiptTemplate or anything load_template() accepts

        Raises:
            TemplateLoadError: template does not validate
        """
        if not isinstance(template, ReceiptTemplate):
            template = load_template(template)

        with self._lock:
            self._templates[template.id] = template
            self._active_template_id = template.id

        logger.info(f"📝 Template cached and active: {template.name} (id={template.id}, v{template.version})")
        return template

    def get_template(self, template_id: str) -> ReceiptTemplate:
        with self._lock:
            template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(f"Template '{template_id}' not found in cache")
        return template

    def activate(self, template_id: str) -> ReceiptTemplate:
        with self._lock:
            template = self.get_template(template_id)
            self._active_template_id = template_id
        return template

    def list_templates(self) -> List[dict]:
        """
        Returns:
            [{"template_id", "name", "version", "active"}, ...]
        """
        with self._lock:
            return [
                {
                    "template_id": template_id,
                    "name": template.name,
                    "version": template.version,
                    "active": template_id == self._active_template_id,
                }
                for template_id, template in self._templates.items()
            ]

    def clear_cache(self) -> None:
        with self._lock:
            self._templates.clear()
            self._active_template_id = None
        logger.info("🗑️  Template cache cleared")

    # ========================================================================
    # RENDER / PRINT
    # ========================================================================

    def _select_template(
        self,
        template_id: Optional[str],
        template: Optional[Union[ReceiptTemplate, Source]],
    ) -> ReceiptTemplate:
        # Inline template wins, then an id from the cache, then the active one
        if template is not None:
            return self.set_template(template)
        if template_id is not None:
            return self.activate(template_id)

        active = self.active_template
        if active is None:
            raise NoActiveTemplateError("No template specified and no active template set")
        return active

    def render(
        self,
        data: Union[ReceiptData, Source],
        template_id: Optional[str] = None,
        template: Optional[Union[ReceiptTemplate, Source]] = None,
    ) -> List[PrintCommand]:
        """
        Render a receipt without printing it

        Raises:
            TemplateNotFoundError, NoActiveTemplateError, LoadError
        """
        if not isinstance(data, ReceiptData):
            data = load_receipt_data(data)
        selected = self._select_template(template_id, template)
        return self.renderer.render(selected, data)

    def print_receipt(
        self,
        data: Union[ReceiptData, Source],
        template_id: Optional[str] = None,
        template: Optional[Union[ReceiptTemplate, Source]] = None,
    ) -> dict:
        """
        Render and send a receipt to the sink

        Returns:
            {
                "success": bool,
                "message": str,
                "commands": int  # commands sent
            }
        """
        if not self.is_connected:
            return {"success": False, "message": "Printer not connected", "commands": 0}

        try:
            if not isinstance(data, ReceiptData):
                data = load_receipt_data(data)
            commands = self.render(data, template_id=template_id, template=template)
        except (LoadError, TemplateNotFoundError, NoActiveTemplateError, ConditionSyntaxError) as e:
            logger.warning(f"⚠️  Receipt not printed: {e}")
            return {"success": False, "message": str(e), "commands": 0}

        # The physical printer takes one receipt at a time
        with self._print_lock:
            try:
                self.sink.send(commands)
            except Exception as e:
                logger.error(f"❌ Print failed for order #{data.order_id}: {e}", exc_info=True)
                return {"success": False, "message": f"Print failed: {e}", "commands": 0}

        logger.info(f"🖨️  Receipt printed (order #{data.order_id}, {len(commands)} commands)")
        return {
            "success": True,
            "message": f"Receipt printed successfully (Order #{data.order_id})",
            "commands": len(commands),
        }

    def test_print(self) -> dict:
        """Print the built-in test receipt with the active template"""
        if self.active_template is None:
            return {"success": False, "message": "No active template set", "commands": 0}
        return self.print_receipt(sample_receipt_data())
