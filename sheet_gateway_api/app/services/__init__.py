"""
Service layer abstraction.

Each service encapsulates one piece of decision logic: the query
engine filters and pages snapshots, the rule service guards writes to
the contact collection and the dispatch service routes requests.  The
services talk to the spreadsheet only through the ``SheetCollection``
interface so the backend can be swapped without touching them.
"""
