"""
Table style operations over Google Sheets values
"""

# columns addressable with a single letter, 'A' through 'Z'
SingleLetterColumns = 26
# the wildcard projection, all columns in header order
WILDCARD = "*"
