"""Bundled wkhtmltopdf executables.

Release builds drop the platform payloads next to this file:
``wkhtmltopdfmac``, ``wkhtmltopdfunix``, ``wkhtmltopdfwin`` and the
unsuffixed ``wkhtmltopdf``.
"""
