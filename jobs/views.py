import logging

from rest_framework import generics
from django_filters.rest_framework import DjangoFilterBackend

from .filters import JobFilter
from .models import Job
from .serializers import JobSerializer

logger = logging.getLogger(__name__)


class JobListCreateAPI(generics.ListCreateAPIView):
    """
    GET lists jobs as a plain JSON array, POST creates one.
    """
    queryset = Job.objects.all()
    serializer_class = JobSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = JobFilter
    pagination_class = None

    def perform_create(self, serializer):
        job = serializer.save()
        logger.info("Created job %s: %s", job.pk, job)
