from django.urls import path

from toll_planner import views

urlpatterns = [
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/tolls", views.toll_gates_view, name="toll-gates"),
    path("api/v1/places", views.places_view, name="places"),
    path("api/v1/toll-estimate", views.toll_estimate_view, name="toll-estimate"),
]
