from __future__ import annotations

import io
import zipfile
from typing import Mapping, Sequence

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ..attendance.model import StudentRecord

EXPORT_COLUMNS = [
    "S.No",
    "Name",
    "Roll Number",
    "Mail ID",
    "Department",
    "Type",
    "Attendance",
    "Marked By",
]

PRESENT_FILENAME = "present_students.xlsx"
ALL_FILENAME = "all_students.xlsx"


def students_frame(students: Sequence[StudentRecord]) -> pd.DataFrame:
    rows = [
        {
            "S.No": i,
            "Name": s.name,
            "Roll Number": s.roll_number,
            "Mail ID": s.mail_id,
            "Department": s.department,
            "Type": s.student_type.value,
            "Attendance": s.status.value,
            "Marked By": s.marked_by,
        }
        for i, s in enumerate(students, start=1)
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def workbook_bytes(df: pd.DataFrame, sheet_title: str) -> bytes:
    """Render one DataFrame into an .xlsx workbook with a bold header and fitted widths."""
    title = sheet_title[:31]  # Excel limit
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=title)
        ws = writer.sheets[title]
        for cell in ws[1]:
            cell.font = Font(bold=True)
        for idx, column in enumerate(df.columns, start=1):
            values = [str(column)] + [str(v) for v in df[column].tolist()]
            ws.column_dimensions[get_column_letter(idx)].width = min(max(len(v) for v in values) + 2, 50)
    return buf.getvalue()


def zip_bytes(files: Mapping[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


def build_attendance_archive(students: Sequence[StudentRecord]) -> bytes:
    present = [s for s in students if s.is_present]
    return zip_bytes(
        {
            PRESENT_FILENAME: workbook_bytes(students_frame(present), "Present Students"),
            ALL_FILENAME: workbook_bytes(students_frame(students), "All Students"),
        }
    )
