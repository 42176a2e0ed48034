"""Services for slackreader - query composition and the search facade."""
