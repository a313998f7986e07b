"""Success envelopes shared by the API views."""
from rest_framework import status
from rest_framework.response import Response

from core.services.listing import list_response


def ok(data, *, created: bool = False) -> Response:
    return Response({'success': True, 'data': data}, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


def ok_list(spec, request, serialize) -> Response:
    """Filtered, paginated listing of ``spec`` driven by the query string."""
    return Response(list_response(spec, request.query_params, serialize))


def done(message: str) -> Response:
    return Response({'success': True, 'message': message})


def validated(serializer_class, request, *, partial: bool = False) -> dict:
    s = serializer_class(data=request.data, partial=partial)
    s.is_valid(raise_exception=True)
    return s.validated_data
