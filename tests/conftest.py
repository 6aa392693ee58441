from unittest.mock import MagicMock

import pytest

PEOPLE = [
    ["name", "age", "city"],
    ["Alice", "30", "Boston"],
    ["Bob", "25", "Denver"],
    ["Carol", "25"],
]

@pytest.fixture
def service():
    """
    Stand-in for the built sheets v4 Resource.  MagicMock hands back the same
    child for every call so responses can be set up with
    service.spreadsheets().values().batchGet().execute.return_value = {...}
    and calls checked with .call_args on the method mocks.
    """
    svc = MagicMock(name="sheets")
    values = svc.spreadsheets.return_value.values.return_value
    values.batchGet.return_value.execute.return_value = {
        "spreadsheetId": "sheet-id",
        "valueRanges": [{"range": "People!A1:C4", "majorDimension": "ROWS",
                         "values": [list(r) for r in PEOPLE]}]
    }
    values.batchUpdate.return_value.execute.return_value = {
        "spreadsheetId": "sheet-id", "totalUpdatedRows": 1,
        "totalUpdatedColumns": 3, "totalUpdatedCells": 3, "totalUpdatedSheets": 1
    }
    values.append.return_value.execute.return_value = {
        "spreadsheetId": "sheet-id", "tableRange": "People!A1:C4",
        "updates": {"spreadsheetId": "sheet-id", "updatedRange": "People!A5:B5",
                    "updatedRows": 1, "updatedColumns": 2, "updatedCells": 2}
    }
    return svc

@pytest.fixture
def values_resource(service):
    return service.spreadsheets.return_value.values.return_value

@pytest.fixture
def people():
    return [list(r) for r in PEOPLE]
