from django.db.models import QuerySet
from rest_framework import mixins, status
from rest_framework.decorators import api_view
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from core.models import User
from core.serializers import SimpleUserSerializer
from exchange.exceptions import NotFound
from exchange.models import Review
from exchange.serializers import ReviewCreateSerializer, ReviewSerializer, ReviewWriteSerializer


class ReviewViewSet(mixins.ListModelMixin, GenericViewSet):
	"""
	Reviews of the authenticated user.

	``GET`` lists the visible reviews the user received, or with ``?given=true`` every review
	the user wrote. ``PATCH`` edits one of the user's reviews and ``DELETE`` hides it.
	"""

	serializer_class = ReviewSerializer
	filterset_fields = ("rating", "exchange_request")
	ordering_fields = ("created_at", "rating")

	def get_queryset(self) -> QuerySet[Review]:
		user = self.request.user

		if self.request.query_params.get("given") == "true":
			return Review.objects.given_by(user).select_related("author", "subject")

		return Review.objects.received_by(user).select_related("author", "subject")

	def get_object(self) -> Review:
		try:
			return Review.objects.select_related("author", "subject", "exchange_request").get(pk=self.kwargs["pk"])

		except Review.DoesNotExist as e:
			raise NotFound("Review not found.") from e

	def create(self, request: Request, *args, **kwargs) -> Response:
		payload = ReviewCreateSerializer(data=request.data)
		payload.is_valid(raise_exception=True)

		review = Review.submit(
			exchange_request_id=payload.validated_data["exchange_request"],
			author=request.user,
			rating=payload.validated_data["rating"],
			comment=payload.validated_data["comment"],
		)

		return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)

	def partial_update(self, request: Request, *args, **kwargs) -> Response:
		payload = ReviewWriteSerializer(data=request.data)
		payload.is_valid(raise_exception=True)

		review = self.get_object().edit(
			request.user,
			rating=payload.validated_data["rating"],
			comment=payload.validated_data["comment"],
		)

		return Response(ReviewSerializer(review).data)

	def destroy(self, request: Request, *args, **kwargs) -> Response:
		self.get_object().soft_delete(request.user)
		return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(["GET"])
def review_statistics_view(request, user_id):
	"""Get the reputation of a member along with their latest visible reviews"""
	try:
		subject = User.objects.get(pk=user_id)

	except User.DoesNotExist as e:
		raise NotFound("User not found.") from e

	return Response({
		"user": SimpleUserSerializer(subject).data,
		"statistics": Review.statistics(subject),
		"latest_reviews": ReviewSerializer(Review.objects.latest_for(subject), many=True).data,
	})
