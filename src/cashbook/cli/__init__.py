"""
Command Line Interface Package

Command Structure:
- cashbook: entry point with utility commands (version, config, status)
- cashbook store: manage stores and pick the active one
- cashbook employee: manage staff of the active store
- cashbook advance: record advances and bank transfers
- cashbook salary: compute and review monthly salary sheets
- cashbook sales: record and review daily till sheets
- cashbook data: CSV import, export and templates
- cashbook report: monthly and cash difference reports

Every command works on the active store, read at the start of the command.
"""
