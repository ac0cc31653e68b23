"""Domain layer for spendboard: entities, services and the spreadsheet import pipeline."""
