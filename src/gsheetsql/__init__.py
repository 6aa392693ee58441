"""
SQL-like access to a single Google Sheets spreadsheet.
Each sheet is treated as a table: the first row holds the column names and
every following row is a record.  Reading, filtering and planning edits is
done in memory on plain lists of rows, and only the fetching and writing of
values goes through the Google Sheets client.

The table logic (select, insert, update, add columns) lives in the sheets
subpackage and has no dependency on the network, the client wrapper in
access/sheets.ops is what actually talks to Google.
"""
