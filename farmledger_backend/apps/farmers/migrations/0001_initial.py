import django.core.validators
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
            name='FarmerProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('district', models.CharField(choices=[('Rajkot', 'Rajkot'), ('Jamnagar', 'Jamnagar'), ('Junagadh', 'Junagadh'), ('Amreli', 'Amreli'), ('Morbi', 'Morbi'), ('Bhavnagar', 'Bhavnagar'), ('Surendranagar', 'Surendranagar'), ('Other', 'Other')], max_length=50)),
                ('taluka', models.CharField(max_length=100)),
                ('village', models.CharField(max_length=100)),
                ('total_land_value', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('total_land_unit', models.CharField(choices=[('acre', 'Acre'), ('bigha', 'Bigha')], default='acre', max_length=10)),
                ('water_source', models.CharField(choices=[('Rain', 'Rain'), ('Borewell', 'Borewell'), ('Canal', 'Canal')], max_length=20)),
                ('tractor_available', models.BooleanField()),
                ('labour_type', models.CharField(choices=[('Family', 'Family'), ('Hired', 'Hired'), ('Mixed', 'Mixed')], max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='farmer_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'farmer_profiles',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['district'], name='farmer_prof_distric_6f1c2a_idx'),
                    models.Index(fields=['district', 'taluka'], name='farmer_prof_distric_9b4e7d_idx'),
                    models.Index(fields=['district', 'taluka', 'village'], name='farmer_prof_distric_3a8d51_idx'),
                ],
            },
        ),
    ]
