import apps.crops.models
import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Crop',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('season', models.CharField(choices=[('Kharif', 'Kharif'), ('Rabi', 'Rabi'), ('Summer', 'Summer')], max_length=10)),
                ('year', models.PositiveIntegerField(db_index=True, default=apps.crops.models.current_year)),
                ('crop_name', models.CharField(max_length=100)),
                ('crop_emoji', models.CharField(default='🌱', max_length=16)),
                ('sub_type', models.CharField(blank=True, default='', max_length=100)),
                ('batch_label', models.CharField(blank=True, default='', help_text='Distinguishes plantings of the same crop in one year', max_length=50)),
                ('area', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('area_unit', models.CharField(choices=[('Bigha', 'Bigha'), ('Acre', 'Acre'), ('Hectare', 'Hectare')], default='Bigha', max_length=10)),
                ('sowing_date', models.DateField(blank=True, null=True)),
                ('harvest_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('Active', 'Active'), ('Harvested', 'Harvested'), ('Closed', 'Closed')], default='Active', max_length=10)),
                ('notes', models.CharField(blank=True, default='', max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='crops', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'crops',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['user', 'season'], name='crops_user_season_idx'),
                    models.Index(fields=['user', 'status'], name='crops_user_status_idx'),
                    models.Index(fields=['user', 'year'], name='crops_user_year_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('user', 'crop_name', 'year', 'batch_label'), name='unique_crop_batch_per_year'),
                ],
            },
        ),
    ]
