from marshmallow import Schema, EXCLUDE, pre_load


def normalize_email(raw):
    """Trim and lower-case an email; non-strings are left for field validation."""
    return raw.strip().lower() if isinstance(raw, str) else raw


class RequestSchema(Schema):
    """
    Base for request bodies: unknown keys are dropped and any email key
    (by its wire name) is normalized before validation.
    """

    email_keys = ("email",)

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def _normalize_emails(self, data, **kwargs):
        if isinstance(data, dict):
            data = dict(data)
            for key in self.email_keys:
                if key in data:
                    data[key] = normalize_email(data[key])
        return data
