from django.urls import path

from .views import (
    AlongRouteView,
    NearbyView,
    NearestTravelTimeView,
    NearestView,
    VisitedDetailView,
    VisitedListView,
)

urlpatterns = [
    path('nearest', NearestView.as_view(), name='nearest'),
    path('nearest-travel-time', NearestTravelTimeView.as_view(), name='nearest-travel-time'),
    path('nearby', NearbyView.as_view(), name='nearby'),
    path('along-route', AlongRouteView.as_view(), name='along-route'),
    path('visited', VisitedListView.as_view(), name='visited-list'),
    path('visited/<str:cip>', VisitedDetailView.as_view(), name='visited-detail'),
]
