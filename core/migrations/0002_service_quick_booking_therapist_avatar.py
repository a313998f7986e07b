from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='service',
            name='quick_booking',
            field=models.BooleanField(default=False, help_text='Offered as a one-click booking'),
        ),
        migrations.AddField(
            model_name='therapist',
            name='avatar',
            field=models.FileField(blank=True, null=True, upload_to='therapists/'),
        ),
    ]
