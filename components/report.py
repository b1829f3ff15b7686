import io
from datetime import date
from typing import Dict, Sequence, Tuple

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from components.tables import frame_to_rows, summary_frame

_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#E6ECE9")),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ]
)


def build_pdf(title: str,
              summary: Sequence[Tuple[str, float]],
              breakdowns: Dict[str, pd.DataFrame]) -> bytes:
    """Create a PDF report with the summary lines and one table per breakdown."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=letter, leftMargin=36, rightMargin=36)
    styles = getSampleStyleSheet()
    story = [
        Paragraph(title, styles["Title"]),
        Paragraph(f"Prepared {date.today():%B %d, %Y}. Estimates only.", styles["Normal"]),
        Spacer(1, 12),
        Paragraph("Summary", styles["Heading2"]),
    ]

    table = Table(frame_to_rows(summary_frame(summary)), hAlign="LEFT")
    table.setStyle(_TABLE_STYLE)
    story.extend([table, Spacer(1, 12)])

    for heading, df in breakdowns.items():
        story.append(Paragraph(heading, styles["Heading2"]))
        if df.empty:
            story.append(Paragraph("No tax owed.", styles["Normal"]))
        else:
            t = Table(frame_to_rows(df), hAlign="LEFT")
            t.setStyle(_TABLE_STYLE)
            story.append(t)
        story.append(Spacer(1, 12))

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes
