from .structured_output import StructuredOutputRunner, parse_json_object
