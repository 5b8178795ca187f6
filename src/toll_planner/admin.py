from django.contrib import admin

from toll_planner.models import TollGate


@admin.register(TollGate)
class TollGateAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "gate_type",
        "cost_car",
        "cost_bike",
        "cost_truck",
        "latitude",
        "longitude",
    )
    list_filter = ("gate_type",)
    search_fields = ("name",)
    ordering = ("name",)
