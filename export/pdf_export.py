"""PDF summary of a completed draft."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core import config

# Built-in CID fonts so Japanese and Chinese text renders without font files
CID_FONTS = {"ja": "HeiseiKakuGo-W5", "zh": "STSong-Light"}

TABLE_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("BOX", (0, 0), (-1, -1), 1, colors.black),
    ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("VALIGN", (0, 0), (-1, -1), "TOP"),
]


def _font_for(lang: str) -> str:
    name = CID_FONTS.get(lang)
    if name is None:
        # Helvetica is WinAnsi only: Vietnamese needs a Unicode TTF (e.g. DejaVuSans)
        # configured through VISA_INTAKE_PDF_FONT, otherwise its diacritics drop out
        if config.PDF_FONT_PATH:
            return _ttf(config.PDF_FONT_PATH)
        return "Helvetica"
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(UnicodeCIDFont(name))
    return name


def _ttf(path: str) -> str:
    name = Path(path).stem
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, path))
    return name


def build_summary_pdf(
    title: str,
    rows: List[Dict[str, str]],
    checklist: List[List[str]],
    headers: Dict[str, str],
    lang: str = "ja",
    note: Optional[str] = None,
) -> bytes:
    """Render review rows and the document checklist to PDF bytes.

    ``rows`` are the dictionaries produced by :func:`core.summary.review_rows`;
    ``checklist`` is a list of ``[label, status]`` pairs.
    """
    font = _font_for(lang)
    # CID fonts have no bold face, so headings rely on style size only
    styles = getSampleStyleSheet()
    for style in styles.byName.values():
        style.fontName = font
    cell = styles["BodyText"]

    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = [Paragraph(escape(title), styles["Title"]), Spacer(1, 12)]

    section = None
    table_rows: List[list] = []
    for row in rows:
        if row["section"] != section:
            if table_rows:
                story += [_table(table_rows, font, headers), Spacer(1, 12)]
            section = row["section"]
            story += [Paragraph(escape(section), styles["Heading3"]), Spacer(1, 6)]
            table_rows = []
        table_rows.append([Paragraph(escape(row["field"]), cell), Paragraph(escape(row["value"]), cell)])
    if table_rows:
        story += [_table(table_rows, font, headers), Spacer(1, 12)]

    if checklist:
        rows_ = [[headers.get("document", ""), headers.get("status", "")]] + checklist
        t = Table(rows_, hAlign="LEFT", colWidths=[360, 160])
        t.setStyle(TableStyle(TABLE_STYLE + [("FONTNAME", (0, 0), (-1, -1), font)]))
        story += [Paragraph(escape(headers.get("documents", "")), styles["Heading3"]), Spacer(1, 6), t]
    if note:
        story += [Spacer(1, 12), Paragraph(f"<font size=8>{escape(note)}</font>", styles["Normal"])]
    doc.build(story)
    return buf.getvalue()


def _table(rows: List[list], font: str, headers: Dict[str, str]) -> Table:
    t = Table([[headers.get("field", ""), headers.get("value", "")]] + rows, hAlign="LEFT", colWidths=[200, 320])
    t.setStyle(TableStyle(TABLE_STYLE + [("FONTNAME", (0, 0), (-1, -1), font)]))
    return t
