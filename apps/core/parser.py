"""
Request body parser accepting JSON and URL-encoded forms.

Form values always arrive as strings, so the literals "true" and "false"
are turned into booleans; everything else is passed through unchanged and
left to schema validation.
"""
from django.http import QueryDict
from ninja.parser import Parser

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

FORM_BOOLEANS = {"true": True, "false": False}


def _form_value(value: str):
    return FORM_BOOLEANS.get(value.lower(), value)


class JsonOrFormParser(Parser):

    def parse_body(self, request):
        if request.content_type == FORM_CONTENT_TYPE:
            # request.POST is only populated for POST; PUT forms are read from the body
            form = QueryDict(request.body, encoding=request.encoding)
            return {key: _form_value(value) for key, value in form.items()}
        return super().parse_body(request)
