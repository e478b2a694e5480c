"""
Ask about a range of a real Google spreadsheet.

Usage:
    python examples/sheets_demo.py <spreadsheet-id> "Sheet1!A1:C10" ["prompt"]

Authentication: requires either a service account JSON at
~/.config/gspread/service_account.json or OAuth credentials at
~/.config/gspread/credentials.json (browser flow on first use).
"""

import asyncio
import sys

import gspread

from askai import AskAI, ErrorValue, ScalarValue
from askai.hosts import SheetsClient, SheetsReference


def _get_gspread_client() -> gspread.Client:
    """Authenticate with Google Sheets, trying service account then OAuth."""
    try:
        return gspread.service_account()
    except Exception:
        pass
    try:
        return gspread.oauth()
    except Exception as exc:
        print(f"Error: could not authenticate with Google Sheets: {exc}")
        sys.exit(1)


async def main(argv):
    if len(argv) < 3:
        print(__doc__)
        sys.exit(2)

    client = SheetsClient(_get_gspread_client())
    spreadsheet = client.open_spreadsheet(argv[1])
    reference = SheetsReference.from_a1(client, spreadsheet, argv[2])
    prompt = ScalarValue(argv[3]) if len(argv) > 3 else None

    result = AskAI().calculate(reference, prompt)
    if isinstance(result, ErrorValue):
        print(f"Argument error: {result.get_value()}")
        return

    answer = await result
    for row in answer.rows:
        print(row)


if __name__ == "__main__":
    asyncio.run(main(sys.argv))
