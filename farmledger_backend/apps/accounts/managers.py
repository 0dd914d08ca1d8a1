# apps/accounts/managers.py

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Custom user manager with the phone number as unique identifier
    """

    use_in_migrations = True

    @staticmethod
    def normalize_phone_number(phone_number):
        """
        Normalize phone number to its 10-digit national form
        """
        cleaned = (
            str(phone_number)
            .replace(' ', '')
            .replace('-', '')
            .replace('(', '')
            .replace(')', '')
        )

        if cleaned.startswith('+91'):
            cleaned = cleaned[3:]
        elif cleaned.startswith('91') and len(cleaned) == 12:
            cleaned = cleaned[2:]
        elif cleaned.startswith('0') and len(cleaned) == 11:
            cleaned = cleaned[1:]

        return cleaned

    def create_user(self, phone_number, password=None, **extra_fields):
        """
        Create and save a regular user for the given phone number
        """
        if not phone_number:
            raise ValueError('Users must have a phone number')

        phone_number = self.normalize_phone_number(phone_number)
        extra_fields.setdefault('role', 'farmer')

        user = self.model(phone_number=phone_number, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, phone_number, password=None, **extra_fields):
        """
        Create and save a superuser with admin privileges
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', 'admin')

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')

        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(phone_number, password, **extra_fields)

    def get_or_create_for_phone(self, phone_number):
        """
        Find the user for a verified phone number, creating it on first login

        Returns:
            tuple: (user, created)
        """
        phone_number = self.normalize_phone_number(phone_number)

        user = self.filter(phone_number=phone_number).first()
        if user:
            return user, False

        return self.create_user(phone_number), True