"""Spreadsheet I/O: first-sheet reader and fixed-template writer."""
