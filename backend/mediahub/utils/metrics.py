"""
Prometheus metrics definitions.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Image pipeline metrics
images_uploaded_total = Counter(
    'images_uploaded_total',
    'Total images persisted',
    ['mime']
)

image_upload_failures_total = Counter(
    'image_upload_failures_total',
    'Total uploads rejected or failed, by error code',
    ['reason']
)

image_upload_size_bytes = Histogram(
    'image_upload_size_bytes',
    'Size of persisted images in bytes',
    buckets=[1_000, 10_000, 50_000, 100_000, 250_000, 500_000, 1_000_000]
)

images_downloaded_total = Counter(
    'images_downloaded_total',
    'Total images served by filename'
)
