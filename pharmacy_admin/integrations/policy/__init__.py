"""
Response policy: normalisation of backend records and API error types.
"""
