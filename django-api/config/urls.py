from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/", include("scheduling.urls")),
]

handler404 = "scheduling.handlers.responses.not_found"
handler500 = "scheduling.handlers.responses.server_error"
