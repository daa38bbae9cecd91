# Blank upload templates (.xlsx) for each roster type
from io import BytesIO

import pandas as pd

from .pipeline import ImportRole

INSTRUCTION_TEXT = (
    "IMPORTANT: Fields marked as REQUIRED must be filled in. "
    "Enter one person per row below this line and keep the header row unchanged."
)

SHEET_NAMES = {
    'student': 'Students',
    'teacher': 'Teachers',
    'admin-staff': 'Admin Staff',
    'support-staff': 'Support Staff',
}


def template_filename(role: ImportRole) -> str:
    return f"{role.user_type}-template.xlsx"


def build_template(role: ImportRole) -> bytes:
    """Workbook with the annotated header row and one instruction row."""
    headers = list(role.template_headers)
    instruction = [INSTRUCTION_TEXT] + [""] * (len(headers) - 1)
    df = pd.DataFrame([instruction], columns=headers)
    output = BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        sheet = SHEET_NAMES.get(str(role.user_type), 'Sheet1')
        df.to_excel(writer, index=False, sheet_name=sheet)
        ws = writer.sheets[sheet]
        for idx, header in enumerate(headers, start=1):
            letter = ws.cell(row=1, column=idx).column_letter
            ws.column_dimensions[letter].width = max(15, min(len(header) + 2, 45))
    return output.getvalue()
