"""Daily Report System package.

Organized by feature modules (reports, users, auth) around a workflow layer
that returns Either values, with a thin Flask JSON layer and repository ports
implemented for MySQL.
"""
