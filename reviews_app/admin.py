from django.contrib import admin

from .models import Review


class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'establishment', 'user', 'rating', 'title', 'created_at')
    list_filter = ('rating',)
    raw_id_fields = ('establishment', 'user')


admin.site.register(Review, ReviewAdmin)
