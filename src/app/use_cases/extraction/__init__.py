"""Invoice extraction use cases (free text and scanned images)"""
from .parse_invoice_text import ParseInvoiceText
from .extract_invoice_image import ExtractInvoiceImage
from .ocr_text_parser import parse_ocr_text, OcrFields, OcrLineItem
from .dtos import ParseTextCommandDTO, ParsedInvoiceDTO, ImageExtractionResultDTO

__all__ = [
    "ParseInvoiceText",
    "ExtractInvoiceImage",
    "parse_ocr_text",
    "OcrFields",
    "OcrLineItem",
    "ParseTextCommandDTO",
    "ParsedInvoiceDTO",
    "ImageExtractionResultDTO",
]
