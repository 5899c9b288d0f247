"""
Initial migration for Rollman models.
"""

from decimal import Decimal
import django.core.validators
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Roll."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Roll',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('length', models.DecimalField(decimal_places=3, max_digits=9, validators=[django.core.validators.MinValueValidator(Decimal('0.001'))], verbose_name='Length')),
                ('weight', models.DecimalField(decimal_places=3, max_digits=9, validators=[django.core.validators.MinValueValidator(Decimal('0.001'))], verbose_name='Weight')),
                ('added_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Added at')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, help_text='Empty = still on stock.', null=True, verbose_name='Deleted at')),
            ],
            options={
                'verbose_name': 'Roll',
                'verbose_name_plural': 'Rolls',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['added_at', 'deleted_at'], name='rollman_roll_presence_idx')],
            },
        ),
    ]
