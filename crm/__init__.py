"""CRM access control and roster derivation core."""
