import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Case",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("victim_name", models.CharField(max_length=255, verbose_name="Victim Name")),
                ("victim_age", models.PositiveIntegerField(blank=True, null=True, verbose_name="Victim Age")),
                ("victim_gender", models.CharField(blank=True, max_length=50, null=True, verbose_name="Victim Gender")),
                ("barangay", models.CharField(blank=True, db_index=True, max_length=255, null=True, verbose_name="Barangay")),
                ("incident_date", models.DateTimeField(verbose_name="Incident Date")),
                ("incident_type", models.CharField(max_length=255, verbose_name="Incident Type")),
                ("incident_location", models.CharField(blank=True, max_length=500, null=True, verbose_name="Incident Location")),
                ("perpetrator_name", models.CharField(max_length=255, verbose_name="Perpetrator Name")),
                ("perpetrator_relationship", models.CharField(blank=True, max_length=255, null=True, verbose_name="Relationship to Victim")),
                ("encoder_name", models.CharField(max_length=255, verbose_name="Encoder Name")),
                ("status", models.CharField(choices=[("active", "Active"), ("pending", "Pending"), ("closed", "Closed")], db_index=True, max_length=20, verbose_name="Status")),
                ("priority", models.CharField(blank=True, choices=[("High", "High"), ("Medium", "Medium"), ("Low", "Low")], default="Medium", max_length=10, null=True, verbose_name="Priority")),
                ("case_notes", models.TextField(blank=True, null=True, verbose_name="Case Notes (scratch)")),
            ],
            options={
                "verbose_name": "Case",
                "verbose_name_plural": "Cases",
                "db_table": "cases",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(max_length=255, verbose_name="Service Type")),
                ("date_provided", models.DateTimeField(verbose_name="Date Provided")),
                ("provider", models.CharField(help_text="Name of the person or organisation that rendered the service.", max_length=255, verbose_name="Provider")),
                ("notes", models.TextField(blank=True, null=True, verbose_name="Notes")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("case", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="services", to="cases.case", verbose_name="Case")),
            ],
            options={
                "verbose_name": "Service",
                "verbose_name_plural": "Services",
                "db_table": "services",
                "ordering": ["-date_provided", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Note",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content", models.TextField(verbose_name="Content")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="authored_notes", to=settings.AUTH_USER_MODEL, verbose_name="Author")),
                ("case", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notes", to="cases.case", verbose_name="Case")),
            ],
            options={
                "verbose_name": "Note",
                "verbose_name_plural": "Notes",
                "db_table": "notes",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["case", "created_at"], name="notes_case_created_idx")],
            },
        ),
    ]
