# src/quotebook/shared/language.py
"""
Language Management - Document and Notification Labels

This module provides the label tables used when rendering budgets, delivery
notes, cost sheets and operator notifications, plus the current-language
preference. Spanish is the business language and the default.

Files that USE this module:
- quotebook.adapters.formatting.formatter (document and share text labels)
- quotebook.application.* (validation and notification messages)

Files that this module USES:
- quotebook.config (default_language setting)
"""
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Language constants
LANG_SPANISH = "es"
LANG_ENGLISH = "en"
SUPPORTED_LANGUAGES = (LANG_SPANISH, LANG_ENGLISH)


# Translation dictionaries
TRANSLATIONS: Dict[str, Dict[str, str]] = {
    LANG_SPANISH: {
        # Budget document / share text
        "budget_title": "PRESUPUESTO",
        "budget_number": "PRESUPUESTO N°: {number}",
        "company_rif": "RIF: {rif}",
        "client": "Cliente: {name}",
        "client_address": "Dirección: {address}",
        "client_rif": "RIF Cliente: {rif}",
        "date": "Fecha: {date}",
        "materials_header": "MATERIALES:",
        "item_name": "{index}. {name}",
        "item_size": "   Medida: {width} x {height}m",
        "item_price_area": "   Precio: {price} por m²",
        "item_price_piece": "   Precio: {price} por pieza",
        "item_quantity_area": "   Cantidad: {quantity} x {area} m²",
        "item_quantity_piece": "   Cantidad: {quantity} piezas",
        "item_subtotal": "   Subtotal: {amount}",
        "subtotal": "SUBTOTAL: {amount}",
        "tax": "IVA ({pct}%): {amount}",
        "total": "TOTAL GENERAL: {amount}",
        "exchange_rate": "Tasa de cambio: {rate} Bs. por USD",
        "notes": "NOTAS: {notes}",
        # Delivery note
        "delivery_note_title": "NOTA DE ENTREGA",
        "delivered_materials": "MATERIALES ENTREGADOS:",
        "transport_header": "DATOS DE TRANSPORTE:",
        "transported_by": "Transportado por: {value}",
        "id_number": "Cédula: {value}",
        "plate": "Placa: {value}",
        "vehicle_model": "Modelo de vehículo: {value}",
        "delivered_signature": "Entregado por: ______________________",
        "received_signature": "Recibido por: ______________________",
        # Cost analysis
        "cost_title": "ANÁLISIS DE COSTOS",
        "cost_materials_header": "MATERIALES:",
        "material_line": "{index}. {name}: {quantity} {unit} x {unit_cost} = {total}",
        "material_cost_total": "Costo de materiales: {amount}",
        "labor_cost": "Mano de obra: {amount}",
        "overhead": "Gastos generales: {amount}",
        "total_cost": "Costo total: {amount}",
        "product_value": "Valor de productos: {amount}",
        "profit": "Ganancia: {amount}",
        "profit_margin": "Margen de ganancia: {margin}%",
        # Field names
        "field_name": "Nombre",
        "field_width": "Ancho",
        "field_height": "Alto",
        "field_unit_price": "Precio",
        "field_quantity": "Cantidad",
        "field_unit_cost": "Costo unitario",
        "field_quantity_needed": "Cantidad necesaria",
        "field_labor_cost": "Mano de obra",
        "field_overhead": "Gastos generales",
        "field_rate": "Tasa de cambio",
        # Notifications
        "error_title": "Error",
        "invalid_field": "Valor inválido para {field}",
        "client_required": "El nombre del cliente es requerido",
        "cart_empty": "Debe agregar al menos un producto",
        "product_added_title": "Producto agregado",
        "product_added": "{name} agregado correctamente",
        "budget_saved_title": "Presupuesto guardado",
        "budget_saved": "Presupuesto N° {number} para {client} guardado exitosamente",
        "budget_updated": "Presupuesto N° {number} actualizado exitosamente",
        "budget_save_failed": "No se pudo guardar el presupuesto: {error}",
        "budget_deleted_title": "Presupuesto eliminado",
        "budget_deleted": "El presupuesto ha sido eliminado exitosamente",
        "budget_not_found": "No se encontró el presupuesto {budget_id}",
        "settings_save_failed": "No se pudieron guardar los ajustes: {error}",
        "cost_save_failed": "No se pudo guardar el análisis de costos: {error}",
        "pdf_ready_title": "PDF generado",
        "pdf_ready": "El archivo PDF se ha guardado en {path}",
        "pdf_failed": "No se pudo generar el archivo PDF",
        "image_ready_title": "Imagen generada",
        "image_ready": "La imagen se ha guardado en {path}",
        "image_failed": "No se pudo generar la imagen",
        "shared_title": "Compartido",
        "shared": "Presupuesto enviado",
        "copied_title": "Copiado",
        "copied": "Presupuesto copiado en {path}",
        "share_failed": "No se pudo compartir el presupuesto",
    },
    LANG_ENGLISH: {
        "budget_title": "BUDGET",
        "budget_number": "BUDGET No.: {number}",
        "company_rif": "Tax ID: {rif}",
        "client": "Client: {name}",
        "client_address": "Address: {address}",
        "client_rif": "Client tax ID: {rif}",
        "date": "Date: {date}",
        "materials_header": "MATERIALS:",
        "item_name": "{index}. {name}",
        "item_size": "   Size: {width} x {height}m",
        "item_price_area": "   Price: {price} per m²",
        "item_price_piece": "   Price: {price} per piece",
        "item_quantity_area": "   Quantity: {quantity} x {area} m²",
        "item_quantity_piece": "   Quantity: {quantity} pieces",
        "item_subtotal": "   Subtotal: {amount}",
        "subtotal": "SUBTOTAL: {amount}",
        "tax": "VAT ({pct}%): {amount}",
        "total": "GRAND TOTAL: {amount}",
        "exchange_rate": "Exchange rate: {rate} Bs. per USD",
        "notes": "NOTES: {notes}",
        "delivery_note_title": "DELIVERY NOTE",
        "delivered_materials": "DELIVERED MATERIALS:",
        "transport_header": "TRANSPORT DETAILS:",
        "transported_by": "Transported by: {value}",
        "id_number": "ID number: {value}",
        "plate": "Plate: {value}",
        "vehicle_model": "Vehicle model: {value}",
        "delivered_signature": "Delivered by: ______________________",
        "received_signature": "Received by: ______________________",
        "cost_title": "COST ANALYSIS",
        "cost_materials_header": "MATERIALS:",
        "material_line": "{index}. {name}: {quantity} {unit} x {unit_cost} = {total}",
        "material_cost_total": "Material cost: {amount}",
        "labor_cost": "Labor: {amount}",
        "overhead": "Overhead: {amount}",
        "total_cost": "Total cost: {amount}",
        "product_value": "Product value: {amount}",
        "profit": "Profit: {amount}",
        "profit_margin": "Profit margin: {margin}%",
        "field_name": "Name",
        "field_width": "Width",
        "field_height": "Height",
        "field_unit_price": "Price",
        "field_quantity": "Quantity",
        "field_unit_cost": "Unit cost",
        "field_quantity_needed": "Quantity needed",
        "field_labor_cost": "Labor",
        "field_overhead": "Overhead",
        "field_rate": "Exchange rate",
        "error_title": "Error",
        "invalid_field": "Invalid value for {field}",
        "client_required": "Client name is required",
        "cart_empty": "Add at least one product",
        "product_added_title": "Product added",
        "product_added": "{name} added",
        "budget_saved_title": "Budget saved",
        "budget_saved": "Budget No. {number} for {client} saved",
        "budget_updated": "Budget No. {number} updated",
        "budget_save_failed": "Could not save the budget: {error}",
        "budget_deleted_title": "Budget deleted",
        "budget_deleted": "The budget was deleted",
        "budget_not_found": "Budget {budget_id} not found",
        "settings_save_failed": "Could not save settings: {error}",
        "cost_save_failed": "Could not save the cost analysis: {error}",
        "pdf_ready_title": "PDF generated",
        "pdf_ready": "PDF saved to {path}",
        "pdf_failed": "Could not generate the PDF file",
        "image_ready_title": "Image generated",
        "image_ready": "Image saved to {path}",
        "image_failed": "Could not generate the image",
        "shared_title": "Shared",
        "shared": "Budget sent",
        "copied_title": "Copied",
        "copied": "Budget copied to {path}",
        "share_failed": "Could not share the budget",
    },
}


class LanguageManager:
    """Holds the current label language (in memory, seeded from settings)."""

    def __init__(self, default_language: Optional[str] = None):
        """
        Initialize language manager.

        Args:
            default_language: Initial language; defaults to settings.default_language
        """
        if default_language is None:
            from quotebook.config import settings
            default_language = settings.default_language
        self._current_language = (
            default_language if default_language in SUPPORTED_LANGUAGES else LANG_SPANISH
        )

    def get_language(self) -> str:
        return self._current_language

    def set_language(self, lang: str) -> bool:
        """
        Set language preference.

        Args:
            lang: Language code ('es' or 'en')

        Returns:
            True if language was set successfully, False if invalid
        """
        if lang not in SUPPORTED_LANGUAGES:
            logger.warning("Invalid language code: %s", lang)
            return False
        self._current_language = lang
        logger.info("Language set to: %s", lang)
        return True


# Global language manager instance, created on first use (settings imports
# shared.validators, so this module must not import settings at load time).
_language_manager: Optional[LanguageManager] = None


def _get_manager() -> LanguageManager:
    global _language_manager
    if _language_manager is None:
        _language_manager = LanguageManager()
    return _language_manager


def get_language() -> str:
    return _get_manager().get_language()


def set_language(lang: str) -> bool:
    return _get_manager().set_language(lang)


def translate(key: str, lang: Optional[str] = None, **kwargs) -> str:
    """
    Look up a label and fill its placeholders.

    Falls back to Spanish, then to the key itself, when a label is missing.

    Args:
        key: Label key
        lang: Language code (default: current language)
        **kwargs: Placeholder values

    Returns:
        The formatted label
    """
    lang = lang or get_language()
    template = TRANSLATIONS.get(lang, {}).get(key) or TRANSLATIONS[LANG_SPANISH].get(key)
    if template is None:
        logger.warning("Missing translation key: %s", key)
        return key
    return template.format(**kwargs) if kwargs else template
