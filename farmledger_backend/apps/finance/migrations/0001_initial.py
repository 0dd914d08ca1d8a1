import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('crops', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate)),
                ('notes', models.TextField(blank=True, default='')),
                ('record_type', models.CharField(max_length=30)),
                ('details', models.JSONField(default=dict)),
                ('amount', models.DecimalField(decimal_places=2, default=0, help_text='Effective monetary value, derived from details', max_digits=12)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.CharField(choices=[('Seed', 'Seed'), ('Fertilizer', 'Fertilizer'), ('Pesticide', 'Pesticide'), ('Labour', 'Labour'), ('Machinery', 'Machinery')], db_index=True, max_length=20)),
                ('crop', models.ForeignKey(db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name='expenses', to='crops.crop')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='expenses', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'expenses',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['user', 'date'], name='expenses_user_date_idx'),
                    models.Index(fields=['crop', 'category'], name='expenses_crop_category_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Income',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate)),
                ('notes', models.TextField(blank=True, default='')),
                ('record_type', models.CharField(max_length=30)),
                ('details', models.JSONField(default=dict)),
                ('amount', models.DecimalField(decimal_places=2, default=0, help_text='Effective monetary value, derived from details', max_digits=12)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.CharField(choices=[('Crop Sale', 'Crop Sale'), ('Subsidy', 'Subsidy'), ('Rental Income', 'Rental Income'), ('Other', 'Other')], db_index=True, max_length=20)),
                ('crop', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='incomes', to='crops.crop')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='incomes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'income',
                'ordering': ['-date', '-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['user', 'date'], name='income_user_date_idx'),
                    models.Index(fields=['crop', 'category'], name='income_crop_category_idx'),
                ],
            },
        ),
    ]
