from django.urls import path, include

urlpatterns = [
    path('api/v1/', include('pharmacy_api.urls')),
]
