"""Core guard pipeline: types, tools, sandbox, ignore policy and result checks."""
