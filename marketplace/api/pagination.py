from marketplace.api.serializers import PaginationQuerySerializer


def pagination_params(request):
    """Validated ``(limit, offset)`` from the query string; bad values raise a 400."""
    serializer = PaginationQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data["limit"], serializer.validated_data["offset"]
