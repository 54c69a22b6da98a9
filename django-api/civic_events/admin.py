from django.contrib import admin

from civic_events.models import Concert, Exhibition, Fair, Film, FilmSeries, Participant, Person, Workshop

EVENT_LIST_DISPLAY = ["name", "start_date", "duration_days", "status", "max_capacity"]


class ParticipantInline(admin.TabularInline):
    model = Participant
    fk_name = "event"
    extra = 0
    autocomplete_fields = ["person"]


class FilmInline(admin.TabularInline):
    model = Film
    extra = 1


class EventVariantAdmin(admin.ModelAdmin):
    list_display = EVENT_LIST_DISPLAY
    list_filter = ["status"]
    search_fields = ["name"]
    filter_horizontal = ["organizers"]
    inlines = [ParticipantInline]


@admin.register(Person)
class PersonAdmin(admin.ModelAdmin):
    list_display = ["last_name", "first_name", "national_id", "email"]
    search_fields = ["first_name", "last_name", "national_id"]


@admin.register(Fair)
class FairAdmin(EventVariantAdmin):
    list_display = EVENT_LIST_DISPLAY + ["stand_count", "outdoor"]


@admin.register(Concert)
class ConcertAdmin(EventVariantAdmin):
    filter_horizontal = ["organizers", "performers"]


@admin.register(Exhibition)
class ExhibitionAdmin(EventVariantAdmin):
    list_display = EVENT_LIST_DISPLAY + ["art_category", "curator"]


@admin.register(Workshop)
class WorkshopAdmin(EventVariantAdmin):
    list_display = EVENT_LIST_DISPLAY + ["instructor", "delivery_mode"]


@admin.register(FilmSeries)
class FilmSeriesAdmin(EventVariantAdmin):
    inlines = [FilmInline, ParticipantInline]


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ["person", "event", "enrolled_at"]
    list_filter = ["event__kind"]
    autocomplete_fields = ["person"]
