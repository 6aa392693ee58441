"""
Thin wrappers over the Sheets v4 client calls the table operations need.
Every function takes the built sheets service (a googleapiclient Resource)
as its first argument, nothing here holds on to a client.  Use
GWSAccess.get_service("sheets", "v4") or anything that quacks the same way.

HttpError from the client is not caught, pass it to error_message() to log
it and get a message to show.
"""
import json
import logging

from collections.abc import Iterable

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from .resources import *

logger = logging.getLogger(__name__)

def _range_list(ranges: str|Iterable[str]) -> list[str]:
    if isinstance(ranges, str):
        return [ranges]
    return [str(r) for r in ranges]

def get(service: Resource, spreadsheetId: str,
        ranges: str|Iterable[str] = (),
        includeGridData: bool = False) -> Spreadsheet:
    """
    Wrapper for calling the get() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
    This is for the spreadsheet title and the list of its sheets.
    """
    if not spreadsheetId:
        raise ValueError("spreadsheetId is required")
    response = service.spreadsheets().get(spreadsheetId=spreadsheetId,
                                          ranges=_range_list(ranges),
                                          includeGridData=includeGridData).execute()
    return Spreadsheet.from_base(response) if response else Spreadsheet()

def getValues(service: Resource, spreadsheetId: str,
              ranges: str|Iterable[str],
              dimension: str = "ROWS",
              valueRenderOption: str = "FORMATTED",
              dateTimeRenderOption: str = "SERIAL") -> GetValuesRequestResponse:
    """
    Wrapper for calling the batchGet() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchGet
    We always call batchGet, even for a single range, calling it with only
    1 range is fine.  Empty trailing rows and cells are not returned.
    """
    range_list = _range_list(ranges)
    dim = GoogleSheetsEnum.dimension(dimension)
    if not dim:
        raise ValueError(f"Invalid majorDimension value: {dimension}")
    value_render = GoogleSheetsEnum.valueRenderOption(valueRenderOption)
    if not value_render:
        raise ValueError(f"Invalid valueRenderOption value: {valueRenderOption}")
    date_time_render = GoogleSheetsEnum.dateTimeRenderOption(dateTimeRenderOption)
    if not date_time_render:
        raise ValueError(f"Invalid dateTimeRenderOption value: {dateTimeRenderOption}")

    response = GetValuesRequestResponse(spreadsheetId)
    if range_list:
        r = service.spreadsheets().values().batchGet(spreadsheetId=spreadsheetId,
                                                     ranges=range_list,
                                                     majorDimension=dim,
                                                     valueRenderOption=value_render,
                                                     dateTimeRenderOption=date_time_render).execute()
        if r:
            response = GetValuesRequestResponse.from_base(r)
        else:
            response.spreadsheetId = ""
    return response

def updateValues(service: Resource, spreadsheetId: str,
                 data: ValueRange|Iterable[ValueRange],
                 valueInputOption: str = "RAW",
                 includeValuesInResponse: bool = False) -> UpdateValuesRequestResponse:
    """
    Wrapper for calling the batchUpdate() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchUpdate
    Write the cell data to the specified ranges, a single range goes through
    batchUpdate too.  None cells are sent as null which leaves the cell as is.
    """
    dlist = [data.to_base()] if isinstance(data, ValueRange) else [d.to_base() for d in data]
    value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
    if not value_input:
        raise ValueError(f"Invalid valueInputOption value: {valueInputOption}")
    response = UpdateValuesRequestResponse(spreadsheetId)
    if dlist:
        body = {
            "valueInputOption": value_input,
            "data": dlist,
            "includeValuesInResponse": includeValuesInResponse
        }
        logger.debug("batchUpdate %s: %s", spreadsheetId, [d['range'] for d in dlist])
        r = service.spreadsheets().values().batchUpdate(spreadsheetId=spreadsheetId, body=body).execute()
        if r:
            response = UpdateValuesRequestResponse.from_base(r)
        else:
            response.spreadsheetId = ""
    return response

def appendValues(service: Resource, spreadsheetId: str,
                 data: ValueRange,
                 valueInputOption: str = "RAW",
                 insertDataOption: str = "OVERWRITE") -> AppendValuesResponse:
    """
    Wrapper for calling the append() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append
    The API looks for a table in data.range and writes the rows after its
    last row.
    """
    value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
    if not value_input:
        raise ValueError(f"Invalid valueInputOption value: {valueInputOption}")
    insert_data = GoogleSheetsEnum.insertDataOption(insertDataOption)
    if not insert_data:
        raise ValueError(f"Invalid insertDataOption value: {insertDataOption}")
    if not data:
        raise ValueError(f"Invalid range value detected: {data.range!r}")
    response = AppendValuesResponse(spreadsheetId)
    if data.values:
        logger.debug("append %s: %d rows to %s", spreadsheetId, len(data.values), data.range)
        r = service.spreadsheets().values().append(spreadsheetId=spreadsheetId,
                                                   range=data.range,
                                                   valueInputOption=value_input,
                                                   insertDataOption=insert_data,
                                                   body=data.to_base()).execute()
        if r:
            response = AppendValuesResponse.from_base(r)
        else:
            response.spreadsheetId = ""
    return response

def error_message(error: HttpError) -> str:
    """
    Pull the message out of an API error, log it and hand it back.
    The JSON error body is preferred, falling back to the HTTP reason.
    """
    message = ""
    content = getattr(error, 'content', b"")
    if content:
        try:
            text = content.decode('utf-8') if isinstance(content, bytes) else str(content)
            message = json.loads(text).get('error', {}).get('message', "")
        except (ValueError, AttributeError):
            message = ""
    if not message:
        message = getattr(error, 'reason', "") or str(error)
    logger.error("error: %s", message)
    return message
