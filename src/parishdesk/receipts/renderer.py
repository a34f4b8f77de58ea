"""
PDF rendering of laid-out receipts using ReportLab (pure Python).

The canvas is created in invariant mode so identical documents serialise to
identical bytes (no creation timestamps or random document IDs).
"""

import io
import math

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

from parishdesk.logging import get_logger

from .document import ArcText, Picture, ReceiptDocument, Ring, Rule, TextRun

logger = get_logger(__name__)

PDF_CREATOR = "parishdesk-receipts"


class ReceiptRenderer:
    """Draw ``ReceiptDocument`` elements onto a ReportLab canvas."""

    def render(self, document: ReceiptDocument) -> bytes:
        buffer = io.BytesIO()
        page_height = document.page_height * mm

        canvas = Canvas(
            buffer,
            pagesize=(document.page_width * mm, page_height),
            invariant=1,
        )
        canvas.setTitle(document.title)
        canvas.setAuthor(document.author)
        canvas.setSubject("Payment receipt")
        canvas.setCreator(PDF_CREATOR)

        for element in document.elements:
            if isinstance(element, TextRun):
                self._text(canvas, element, page_height)
            elif isinstance(element, ArcText):
                self._arc_text(canvas, element, page_height)
            elif isinstance(element, Rule):
                canvas.setStrokeColorRGB(*element.color)
                canvas.setLineWidth(element.line_width * mm)
                canvas.line(
                    element.x1 * mm,
                    page_height - element.y1 * mm,
                    element.x2 * mm,
                    page_height - element.y2 * mm,
                )
            elif isinstance(element, Ring):
                canvas.setStrokeColorRGB(*element.color)
                canvas.setLineWidth(element.line_width * mm)
                canvas.circle(
                    element.cx * mm,
                    page_height - element.cy * mm,
                    element.radius * mm,
                    stroke=1,
                    fill=0,
                )
            elif isinstance(element, Picture):
                self._picture(canvas, element, page_height)

        canvas.showPage()
        canvas.save()

        pdf_bytes = buffer.getvalue()
        buffer.close()
        return pdf_bytes

    @staticmethod
    def _text(canvas: Canvas, run: TextRun, page_height: float) -> None:
        canvas.setFont(run.font, run.size)
        canvas.setFillColorRGB(*run.color)
        canvas.drawString(run.x * mm, page_height - run.y * mm, run.text)

    @staticmethod
    def _arc_text(canvas: Canvas, arc: ArcText, page_height: float) -> None:
        """Set glyphs one by one along the upper arc, centred on the top."""
        radius = arc.radius * mm
        cx = arc.cx * mm
        cy = page_height - arc.cy * mm
        angle = math.pi / 2 + stringWidth(arc.text, arc.font, arc.size) / radius / 2

        canvas.saveState()
        canvas.setFont(arc.font, arc.size)
        canvas.setFillColorRGB(*arc.color)
        for char in arc.text:
            advance = stringWidth(char, arc.font, arc.size) / radius
            glyph_angle = angle - advance / 2
            canvas.saveState()
            canvas.translate(
                cx + radius * math.cos(glyph_angle), cy + radius * math.sin(glyph_angle)
            )
            canvas.rotate(math.degrees(glyph_angle) - 90)
            canvas.drawCentredString(0, 0, char)
            canvas.restoreState()
            angle -= advance
        canvas.restoreState()

    @staticmethod
    def _picture(canvas: Canvas, picture: Picture, page_height: float) -> None:
        try:
            canvas.drawImage(
                ImageReader(io.BytesIO(picture.data)),
                picture.x * mm,
                page_height - (picture.y + picture.height) * mm,
                picture.width * mm,
                picture.height * mm,
                mask="auto",
            )
        except (OSError, ValueError) as exc:
            logger.warning("Receipt logo could not be embedded", error=str(exc))


# Default renderer instance
default_renderer = ReceiptRenderer()


def render_pdf(document: ReceiptDocument) -> bytes:
    """Render a receipt document to PDF bytes."""
    return default_renderer.render(document)


__all__ = ["ReceiptRenderer", "default_renderer", "render_pdf"]
